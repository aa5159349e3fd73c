import uvicorn

import config
from app import create_app


def main() -> None:
    settings = config.load_config()
    # ログ設定は setup_logging 側に任せる
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
