"""
NNTP response codes (RFC 977, RFC 2980 and RFC 3977).
Copyright (C) 2013-2024  Byron Platt

This program is free software: you can redistribute it and/or modify
it under the terms of the GNU General Public License as published by
the Free Software Foundation, either version 3 of the License, or
(at your option) any later version.

This program is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
GNU General Public License for more details.

You should have received a copy of the GNU General Public License
along with this program.  If not, see <http://www.gnu.org/licenses/>.
"""

from enum import IntEnum

__all__ = ["ResponseCode", "ResponseFamily"]


class ResponseFamily(IntEnum):
    """Classification of a response code by its first digit."""

    INFORMATIONAL = 1
    SUCCESS = 2
    CONTINUATION = 3
    TEMPORARY_FAILURE = 4
    PERMANENT_FAILURE = 5

    @classmethod
    def of(cls, code: int) -> "ResponseFamily":
        """Family of a three digit response code.

        Raises:
            ValueError: If the code is not in the range 100 to 599.
        """
        if not 100 <= code <= 599:
            raise ValueError(f"Invalid response code {code}")
        return cls(code // 100)

    @property
    def failed(self) -> bool:
        return self >= ResponseFamily.TEMPORARY_FAILURE


class ResponseCode(IntEnum):
    # misc
    HELP_FOLLOWS = 100
    CAPABILITIES_FOLLOW = 101
    SERVER_DATE = 111

    # connection
    READY_POSTING_ALLOWED = 200
    READY_POSTING_PROHIBITED = 201
    SLAVE_RECOGNIZED = 202
    DISCONNECTING_REQUESTED = 205

    # group selection
    GROUP_SELECTED = 211

    # lists
    INFORMATION_FOLLOWS = 215
    GROUPS_FOLLOW = 215

    # article retrieval
    ARTICLE_FOLLOWS = 220
    HEAD_FOLLOWS = 221
    BODY_FOLLOWS = 222
    ARTICLE_SELECTED = 223
    OVERVIEW_FOLLOWS = 224
    HEADERS_FOLLOW = 225
    NEW_ARTICLES_FOLLOW = 230
    NEW_GROUPS_FOLLOW = 231

    # transfer and posting
    TRANSFER_SUCCESS = 235
    POSTING_SUCCESS = 240
    AUTHORIZATION_ACCEPTED = 250
    AUTHENTICATION_ACCEPTED = 281
    TRANSFER_SEND = 335
    POSTING_SEND = 340
    AUTHORIZATION_CONTINUE = 350
    AUTHENTICATION_CONTINUE = 381

    # temporary failures
    DISCONNECTING_FORCED = 400
    WRONG_MODE = 401
    INTERNAL_FAULT = 403
    NO_SUCH_GROUP = 411
    NO_GROUP_SELECTED = 412
    NO_ARTICLE_SELECTED = 420
    NO_NEXT_ARTICLE = 421
    NO_PREVIOUS_ARTICLE = 422
    NO_SUCH_ARTICLE_NUMBER = 423
    NO_SUCH_ARTICLE_ID = 430
    TRANSFER_UNWANTED = 435
    TRANSFER_FAILURE = 436
    TRANSFER_REJECTED = 437
    POSTING_PROHIBITED = 440
    POSTING_FAILURE = 441
    AUTHORIZATION_REQUIRED = 450
    AUTHORIZATION_REJECTED = 452
    AUTHENTICATION_REQUIRED = 480
    AUTHENTICATION_REJECTED = 482
    ENCRYPTION_REQUIRED = 483

    # permanent failures
    UNKNOWN_COMMAND = 500
    SYNTAX_ERROR = 501
    NOT_PERMITTED = 502
    NOT_SUPPORTED = 503
    BASE64_ENCODING_ERROR = 504

    @property
    def family(self) -> ResponseFamily:
        return ResponseFamily.of(self)
