"""Catalog error taxonomy.

Only build-wide failures (``AlreadyInProgressError``, ``UpstreamUnavailableError``)
reach callers of the catalog builder. Descriptor and file count errors are
recovered inside the resolver and enricher.
"""


class CatalogError(Exception):
    """Base class for catalog build failures."""


class AlreadyInProgressError(CatalogError):
    """Raised when a rebuild for the same package type is already running.

    Args:
        package_type: Identifier of the package type being rebuilt.
    """

    def __init__(self, package_type: str) -> None:
        self.package_type = package_type
        super().__init__(f"There is an existing catalog request for {package_type}")


class UpstreamUnavailableError(CatalogError):
    """Raised when the search service returns an unusable response.

    Args:
        body: Raw response body (or transport error text).
        status_code: Optional HTTP status code.
    """

    def __init__(self, body: str, status_code: int | None = None) -> None:
        self.body = body
        self.status_code = status_code
        super().__init__(body)


class DescriptorError(CatalogError):
    """Base class for descriptor fetch failures."""


class DescriptorNotFoundError(DescriptorError):
    """Raised when the repository has no descriptor at the expected path."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(url)


class DescriptorUnavailableError(DescriptorError):
    """Raised when the descriptor could not be fetched or parsed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class FileCountError(CatalogError):
    """Raised when the file count service fails for one version."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
