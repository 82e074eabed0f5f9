from .article import Article
from .codes import ResponseCode, ResponseFamily
from .errors import (
    NNTPAuthIncompleteError,
    NNTPAuthRejectedError,
    NNTPDataError,
    NNTPError,
    NNTPPermanentError,
    NNTPProtocolError,
    NNTPReplyError,
    NNTPSyncError,
    NNTPTemporaryError,
    NNTPTransportError,
    NNTPUnexpectedEOFError,
    NNTPValidationError,
)
from .headerdict import HeaderDict
from .nntp import BaseNNTPClient, NNTPClient
from .types import MessageID, Range

__all__ = [
    "Article",
    "BaseNNTPClient",
    "HeaderDict",
    "MessageID",
    "NNTPAuthIncompleteError",
    "NNTPAuthRejectedError",
    "NNTPClient",
    "NNTPDataError",
    "NNTPError",
    "NNTPPermanentError",
    "NNTPProtocolError",
    "NNTPReplyError",
    "NNTPSyncError",
    "NNTPTemporaryError",
    "NNTPTransportError",
    "NNTPUnexpectedEOFError",
    "NNTPValidationError",
    "Range",
    "ResponseCode",
    "ResponseFamily",
]
