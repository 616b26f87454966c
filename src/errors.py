"""Exception types raised by the BillChat pipeline."""


class BillChatError(Exception):
    """Base class for BillChat errors."""


class ConfigurationError(BillChatError):
    """A required credential or endpoint is missing.

    Raised before any network call is attempted.
    """


class BillTextError(BillChatError):
    """Downloading a bill's text failed."""


class EmbeddingError(BillChatError):
    """An embedding batch call failed.

    The partially embedded content must be discarded by the caller.
    """

    def __init__(self, bill_id: str, batch_index: int, cause: Exception):
        self.bill_id = bill_id
        self.batch_index = batch_index
        self.cause = cause
        super().__init__(
            f"Failed to create embeddings for {bill_id} (batch {batch_index}): {cause}"
        )


class SearchError(BillChatError):
    """Similarity search could not be performed."""


class EmptyIndexError(SearchError):
    """Search was attempted on content that has no embeddings."""


class ChatProviderError(BillChatError):
    """The language model call failed."""
