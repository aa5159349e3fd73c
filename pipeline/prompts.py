VIEWER_INSTRUCTION = (
    "Act like twitch chat and create a username separated by a ':' then give a one line "
    "response to the user's prompt. Write nothing else except the username and the response. "
    "Make each response distinct from the previous. Send {viewers} responses separated by "
    "the '|' character. Don't put a '|' after the last response."
)


def build_viewer_instruction(viewers: int) -> str:
    # 形式はモデルへのお願いのみ。返ってきた文字列は検証しない
    return VIEWER_INSTRUCTION.format(viewers=viewers)
