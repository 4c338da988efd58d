import ipaddress

UNKNOWN_IP = "unknown"

FORWARDING_HEADERS = ("X-Real-IP", "CF-Connecting-IP", "True-Client-IP")


def is_valid_ip(value):
    if not value or not isinstance(value, str):
        return False
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def client_ip(request):
    """Best-effort client address, used to spot repeat votes."""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        candidate = forwarded_for.split(",")[0].strip()
        if is_valid_ip(candidate):
            return candidate

    for header in FORWARDING_HEADERS:
        candidate = (request.headers.get(header) or "").strip()
        if is_valid_ip(candidate):
            return candidate

    if is_valid_ip(request.remote_addr):
        return request.remote_addr
    return UNKNOWN_IP
