import json


def safe_get(payload, *keys, default=None):
    """Traverse nested dicts safely and return default on missing keys."""
    cur = payload
    for key in keys:
        if not isinstance(cur, dict) or key not in cur:
            return default
        cur = cur[key]
    return cur


def dump_payload(payload):
    """Render an API payload for log output."""
    if payload is None:
        return "<no response>"
    if isinstance(payload, str):
        return payload
    try:
        return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True)
    except (TypeError, ValueError):
        return repr(payload)
