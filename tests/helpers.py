import base64


def b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")
