"""
Client IP resolution shared by the request hooks
"""
import ipaddress

PROXY_HEADERS = ('cf-connecting-ip', 'x-forwarded-for', 'x-real-ip')


def client_ip(request) -> str:
    """First valid address from the proxy headers, else the peer address"""
    for header in PROXY_HEADERS:
        value = request.headers.get(header)
        if not value:
            continue
        candidate = value.split(',')[0].strip()
        try:
            ipaddress.ip_address(candidate)
        except ValueError:
            continue
        return candidate

    return request.ip or 'UNKNOWN'
