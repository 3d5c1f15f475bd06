from flask import request


def client_ip() -> str:
    # first hop only: X-Forwarded-For may carry a proxy chain
    forwarded = request.headers.get("X-Forwarded-For", "")
    ip = forwarded.split(",")[0].strip() if forwarded else request.remote_addr
    return (ip or "unknown")[:64]
