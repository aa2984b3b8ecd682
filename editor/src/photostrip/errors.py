"""Domain exceptions for the photo strip editor."""


class AssetLoadFailure(Exception):
    """An image asset (photo, sticker or frame) could not be decoded.

    Raised by the asset store when a caller asks for a failed asset. The
    renderer catches it and draws a placeholder instead of aborting the pass.
    """

    def __init__(self, source_id, reason=None):
        self.source_id = source_id
        self.reason = reason
        message = f"Failed to load image: {source_id}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
