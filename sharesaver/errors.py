"""Error taxonomy for the share-link pipeline and its collaborators."""


class ShareSaverError(Exception):
    """Base class for every error the CLI reports to the user."""


class EmptyInput(ShareSaverError):
    def __init__(self):
        super().__init__("Please provide a share link")


class TransportError(ShareSaverError):
    """The request never produced an HTTP response (DNS, connect, timeout...)."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Request to {url} failed: {reason}")


class UpstreamStatusError(ShareSaverError):
    def __init__(self, url: str, status: int):
        self.url = url
        self.status = status
        super().__init__(f"Proxy returned HTTP {status} for {url}")


class SaveError(ShareSaverError):
    def __init__(self, path, reason: str):
        self.path = path
        super().__init__(f"Error saving file {path}: {reason}")


class UnsupportedFormat(ShareSaverError):
    def __init__(self, fmt: str):
        self.format = fmt
        super().__init__(f"{fmt.upper()} is not available yet")
