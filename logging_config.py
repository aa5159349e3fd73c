import logging
from pathlib import Path
from typing import Union


def setup_logging(log_path: str = "./app.log", level: Union[int, str] = logging.INFO) -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    # uvicorn のログも同じフォーマットに揃える（root に流す）
    for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
        u_logger = logging.getLogger(logger_name)
        u_logger.handlers = []
        u_logger.propagate = True

    # requests の接続ログは多いので抑える
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    if root.handlers:
        return

    log_formatter = logging.Formatter(
        "%(asctime)s - %(levelname)s : [%(name)s] %(message)s - (%(filename)s : %(lineno)s)"
    )

    # コンソール出力用
    s_handler = logging.StreamHandler()
    s_handler.setFormatter(log_formatter)
    s_handler.setLevel(level)
    root.addHandler(s_handler)

    # ログファイル保存用
    Path(log_path).parent.mkdir(parents=True, exist_ok=True)
    f_handler = logging.FileHandler(log_path, encoding="utf-8")
    f_handler.setFormatter(log_formatter)
    f_handler.setLevel(logging.DEBUG)
    root.addHandler(f_handler)
