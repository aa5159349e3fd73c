from fastapi import APIRouter, Request
import requests

from services.openai_http import auth_headers

router = APIRouter()


@router.get("/health")
def health(request: Request):
    settings = request.app.state.settings
    result = {"openai": "down", "ok": False}

    # /models が軽くて安定
    try:
        r = requests.get(
            f"{settings.openai_base_url}/models",
            headers=auth_headers(settings.openai_api_key),
            timeout=settings.health_timeout,
        )
        r.raise_for_status()
        result["openai"] = "up"
    except Exception as e:
        result["openai_error"] = str(e)[:160]

    result["ok"] = result["openai"] == "up"
    return result
