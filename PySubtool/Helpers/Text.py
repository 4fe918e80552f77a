BOM = '\ufeff'

def HasBom(text : str) -> bool:
    return text.startswith(BOM)

def RemoveBom(text : str) -> str:
    """ Remove a leading byte order mark if there is one """
    return text[len(BOM):] if HasBom(text) else text

def AddBom(text : str) -> str:
    return text if HasBom(text) else BOM + text

def IsBlank(text : str|None) -> bool:
    return not text or not text.strip()
