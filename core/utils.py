# core/utils.py

def sanitize(data: dict) -> dict:
    """
    Clean a row before it is written:
    - Empty / whitespace-only strings → None
    - Other strings stripped
    - Everything else kept as-is
    """
    clean = {}

    for k, v in data.items():
        if isinstance(v, str):
            stripped = v.strip()
            clean[k] = stripped or None
        else:
            clean[k] = v

    return clean
