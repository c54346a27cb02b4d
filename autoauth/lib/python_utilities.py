def to_wire(text):
    """Request bodies go out as utf-8 bytes, untouched otherwise"""
    if text is None:
        return None
    if isinstance(text, str):
        text = bytes(text, "utf-8")
    return text


def to_normal_str(text):
    """
    Make sure we return a normal string, no matter if we got bytes or str.
    Only used for logging and the communication dump.
    """
    if text is None:
        return text
    if not isinstance(text, str):
        text = text.decode("utf-8", errors="replace")
    text = text.replace("\r\n", "\n")
    return text
