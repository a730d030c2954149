ERRORS = {
  "E_UNAUTHENTICATED": "Call carries no verified caller identity",
  "E_PAYLOAD_TOO_LARGE": "WaveFunction function exceeds max_bytes",
}


class RegistryError(Exception):
    code = ""

    def __init__(self, detail: str | None = None):
        self.detail = detail
        message = ERRORS.get(self.code, "Registry error")
        super().__init__(f"{message}: {detail}" if detail else message)


class Unauthenticated(RegistryError):
    code = "E_UNAUTHENTICATED"


class PayloadTooLarge(RegistryError):
    code = "E_PAYLOAD_TOO_LARGE"

    def __init__(self, size: int, max_bytes: int):
        self.size = size
        self.max_bytes = max_bytes
        super().__init__(f"{size} > {max_bytes}")
