# utils.py
from fastapi import Request

def get_client_ip(request: Request) -> str | None:
    """Tenta extrair IP real atrás de proxy/load balancer."""
    xff = request.headers.get("x-forwarded-for")
    if xff:
        # Pega o primeiro IP da cadeia
        return xff.split(",")[0].strip() or None
    xri = request.headers.get("x-real-ip")
    if xri:
        return xri.strip()
    return request.client.host if request.client else None

def get_user_agent(request: Request) -> str | None:
    return request.headers.get("user-agent") or None
