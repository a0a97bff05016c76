class VitrineError(Exception):
    """Base class for errors raised by the storefront."""


class ValidationError(VitrineError):
    """Input rejected before any write was attempted."""


class StoreError(VitrineError):
    """The document store or the blob store failed to complete an operation."""


class DocumentNotFound(StoreError):
    def __init__(self, collection: str, document_id: str):
        super().__init__("{} document {!r} not found".format(collection, document_id))
        self.collection = collection
        self.document_id = document_id


__all__ = ["DocumentNotFound", "StoreError", "ValidationError", "VitrineError"]
