class WifiTuiError(Exception):
    pass


class NetworkError(WifiTuiError):
    """
    A network-control operation failed. The message is already the
    friendly, user-facing text.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(WifiTuiError):
    pass
