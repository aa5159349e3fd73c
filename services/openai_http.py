import requests


def auth_headers(api_key: str) -> dict:
    return {"Authorization": f"Bearer {api_key}"}


def describe_error(exc: Exception) -> str:
    """requests の例外から、サービス側のエラーメッセージをそのまま取り出す"""
    response = getattr(exc, "response", None)
    if isinstance(exc, requests.HTTPError) and response is not None:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            err = body.get("error")
            if isinstance(err, dict) and err.get("message"):
                return str(err["message"])
            if isinstance(err, str) and err:
                return err
        text = (response.text or "").strip()
        if text:
            return f"{response.status_code}: {text[:300]}"
    return str(exc) or exc.__class__.__name__
