"""
An NNTP library - a bit more useful than the nntplib one (hopefully).
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

from __future__ import annotations

import logging
import ssl
import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from datetime import datetime
from types import TracebackType
from typing import TYPE_CHECKING, Any, Callable, Literal, TypeVar, Union, overload

from . import utils
from .article import Article, Body
from .codes import ResponseCode
from .dialer import dial
from .dotcodec import DotDecoder
from .errors import (
    NNTPAuthIncompleteError,
    NNTPAuthRejectedError,
    NNTPDataError,
    NNTPError,
    NNTPSyncError,
    NNTPTransportError,
    NNTPValidationError,
    reply_error,
)
from .headerdict import HeaderDict
from .options import ArticleOptions, GroupOptions, OverOptions
from .transport import LineTransport, Stream
from .types import (
    ActiveTime,
    ArticleOverview,
    GroupDescriptionListItem,
    GroupListItem,
    GroupStat,
    HeaderFields,
    MessageID,
    OverviewFieldFormat,
    Range,
    Status,
)

if TYPE_CHECKING:
    from typing_extensions import Self

__all__ = ["BaseNNTPClient", "NNTPClient"]

log = logging.getLogger(__name__)

T = TypeVar("T")

RangeArg = Union[Range, tuple[int, ...], int, None]


@contextmanager
def _parsing(command: str) -> Iterator[None]:
    """Attributes data errors raised in the block to command."""
    try:
        yield
    except NNTPDataError as e:
        if e.command is None:
            e.command = command
        raise


class BaseNNTPClient:
    """NNTP BaseNNTPClient.

    Base class for NNTP clients implements the basic command interface:
    sending a command, reading its status, reading dot-terminated blocks and
    keeping commands on the connection strictly sequential.

    The connection is half-duplex. A command is only sent once everything
    belonging to the previous response has been read; an article body that
    was not read to the end is drained first. Running commands on one client
    from more than one thread at a time is not supported, a command started
    while another is in progress raises NNTPSyncError.
    """

    encoding = "utf-8"
    errors = "surrogateescape"

    def __init__(self, stream: Stream) -> None:
        """Constructor for BaseNNTPClient.

        Reads the greeting from an already connected stream.

        Args:
            stream: A connected socket, or any object with socket-like
                recv(), sendall() and close() methods.

        Raises:
            NNTPTransportError: On error in the underlying stream.
            NNTPReplyError: On bad greeting from server.
        """
        self.transport = LineTransport(stream, self.encoding, self.errors)
        self._lock = threading.RLock()
        self._pending: Union[DotDecoder, None] = None
        self.closed = False

        code, message = self.transport.read_status()
        if code not in (
            ResponseCode.READY_POSTING_ALLOWED,
            ResponseCode.READY_POSTING_PROHIBITED,
        ):
            raise reply_error(code, message, "greeting")
        self.posting_allowed = code == ResponseCode.READY_POSTING_ALLOWED
        log.info("Server ready: %d %s", code, message)

    @contextmanager
    def _transaction(self) -> Iterator[None]:
        """Holds the connection for the duration of one command exchange."""
        if not self._lock.acquire(blocking=False):
            raise NNTPSyncError("Command issued while another command is active")
        try:
            yield
        finally:
            self._lock.release()

    def _drain(self) -> None:
        pending, self._pending = self._pending, None
        if pending is not None and not pending.finished:
            discarded = pending.drain()
            log.debug("Drained %d unread body bytes", discarded)

    @contextmanager
    def _block(self) -> Iterator[DotDecoder]:
        """Reader for the dot-terminated block of the current response.

        The block is always read to its end, whichever way the with block
        is left, unless the stream itself failed.
        """
        reader = self.transport.dot_reader()
        try:
            yield reader
        except NNTPTransportError:
            raise
        except BaseException:
            reader.drain()
            raise
        reader.drain()

    def _lines(self, command: str, parse: Callable[[str], T]) -> list[T]:
        with self._block() as reader, _parsing(command):
            return [parse(line) for line in self.transport.text_lines(reader)]

    @staticmethod
    def _expect(status: Status, command: str, *codes: int) -> Status:
        if status.code not in codes:
            raise reply_error(status.code, status.message, command)
        return status

    def command(self, verb: str, args: Union[str, None] = None) -> Status:
        """Call a command on the server.

        Any unread article body from the previous command is drained before
        the command is sent.

        Args:
            verb: The verb of the command to call.
            args: The arguments of the command as a string (default None).

        Returns:
            A tuple of status code (as an integer) and status message.

        Raises:
            NNTPValidationError: If the command contains a line break.
            NNTPProtocolError: If the status line can't be parsed.
            NNTPTransportError: If reading or writing the stream fails.

        Note:
            Failure codes are returned like any other code, it is up to the
            caller to decide which codes it accepts.
        """
        cmd = f"{verb} {args}" if args else verb
        if "\r" in cmd or "\n" in cmd:
            raise NNTPValidationError(f"Line break in command {cmd!r}")

        with self._transaction():
            self._drain()
            if verb.upper() == "AUTHINFO PASS":
                log.debug(">>> %s ****", verb)
            else:
                log.debug(">>> %s", cmd)
            self.transport.write_line(cmd)
            return self.transport.read_status()

    def close(self) -> None:
        """Closes the connection at the client.

        Once this method has been called, no other methods of the NNTPClient
        object should be called.
        """
        self._pending = None
        if not self.closed:
            self.closed = True
            self.transport.close()
            log.info("Connection closed")


class NNTPClient(BaseNNTPClient):
    """NNTP NNTPClient.

    Implements the commands of RFC 3977 (and the RFC 2980 extensions that
    are still in common use). List style responses are read completely and
    returned as lists; article bodies are returned as live readers.

    Note: All commands can raise the following exceptions:
            NNTPTransportError
            NNTPProtocolError
            NNTPReplyError (NNTPTemporaryError, NNTPPermanentError)
            NNTPDataError
            NNTPSyncError
    """

    @classmethod
    def connect(
        cls,
        host: str,
        port: int = 119,
        timeout: Union[float, None] = 30,
        use_ssl: bool = False,
        ssl_context: Union[ssl.SSLContext, None] = None,
        username: str = "",
        password: str = "",
        reader: bool = False,
    ) -> Self:
        """Connects to a usenet server.

        Args:
            host: Hostname for usenet server.
            port: Port for usenet server.
            timeout: Connection timeout
            use_ssl: Should we use ssl
            ssl_context: Context for the ssl connection.
            username: Username for usenet account, no authentication is done
                when empty.
            password: Password for usenet account
            reader: Use reader mode

        Raises:
            OSError: On error connecting. See socket and ssl modules for
                further details.
            NNTPReplyError: On bad response code from server.
        """
        sock = dial(host, port, timeout, use_ssl, ssl_context)
        try:
            client = cls(sock)
            if username:
                client.authenticate(username, password)
            if reader:
                client.mode_reader()
        except Exception:
            sock.close()
            raise
        return client

    def __enter__(self) -> Self:
        """Support for the 'with' context manager statement."""
        return self

    def __exit__(
        self,
        exc_type: Union[type[BaseException], None],
        exc_val: Union[BaseException, None],
        exc_tb: Union[TracebackType, None],
    ) -> Literal[False]:
        """Support for the 'with' context manager statement."""
        if self.closed:
            return False
        if isinstance(exc_val, NNTPTransportError):
            self.close()
            return False
        try:
            self.quit()
        except NNTPError:
            self.close()
            raise
        return False

    # session administration commands
    def capabilities(self, keyword: Union[str, None] = None) -> list[str]:
        """CAPABILITIES command.

        Determines the capabilities of the server.

        See <http://tools.ietf.org/html/rfc3977#section-5.2>

        Args:
            keyword: Passed directly to the server, however, this is unused by
                the server according to RFC3977.

        Returns:
            Each of the capabilities supported by the server. The VERSION
            capability is the first capability.
        """
        with self._transaction():
            status = self.command("CAPABILITIES", keyword)
            self._expect(status, "CAPABILITIES", ResponseCode.CAPABILITIES_FOLLOW)
            return self._lines("CAPABILITIES", str.strip)

    def mode_reader(self) -> bool:
        """MODE READER command.

        Instructs a mode-switching server to switch modes.

        See <http://tools.ietf.org/html/rfc3977#section-5.3>

        Returns:
            Boolean value indicating whether posting is allowed or not.
        """
        code, message = self._expect(
            self.command("MODE READER"),
            "MODE READER",
            ResponseCode.READY_POSTING_ALLOWED,
            ResponseCode.READY_POSTING_PROHIBITED,
        )
        self.posting_allowed = code == ResponseCode.READY_POSTING_ALLOWED
        return self.posting_allowed

    def quit(self) -> None:
        """QUIT command.

        Tells the server to close the connection. After the server acknowledges
        the request to quit the connection is closed both at the server and
        client.

        Once this method has been called, no other methods of the NNTPClient
        object should be called.

        See <http://tools.ietf.org/html/rfc3977#section-5.4>
        """
        self._expect(self.command("QUIT"), "QUIT", ResponseCode.DISCONNECTING_REQUESTED)
        self.close()

    def authenticate(self, username: str, password: str = "") -> None:
        """AUTHINFO USER and AUTHINFO PASS commands.

        See <https://tools.ietf.org/html/rfc4643#section-2.3>

        Args:
            username: Username for usenet account.
            password: Password for usenet account, only sent if the server
                asks for it.

        Raises:
            NNTPValidationError: If the username is empty, or the server asks
                for a password and it is empty.
            NNTPAuthRejectedError: If the server rejects the credentials.
            NNTPAuthIncompleteError: If the exchange ends on any other code.
        """
        if not username:
            raise NNTPValidationError("Empty username")

        with self._transaction():
            code, message = self.command("AUTHINFO USER", username)
            if code == ResponseCode.AUTHENTICATION_CONTINUE:
                if not password:
                    raise NNTPValidationError("Empty password")
                code, message = self.command("AUTHINFO PASS", password)

        if code == ResponseCode.AUTHENTICATION_ACCEPTED:
            log.info("Authenticated as %s", username)
            return
        if code in (
            ResponseCode.AUTHENTICATION_REJECTED,
            ResponseCode.NOT_PERMITTED,
        ):
            raise NNTPAuthRejectedError(code, message, "AUTHINFO")
        raise NNTPAuthIncompleteError(code, message, "AUTHINFO")

    # information commands
    def date(self) -> datetime:
        """DATE command.

        Coordinated Universal time from the perspective of the usenet server.
        It can be used to provide information that might be useful when using
        the NEWNEWS command.

        See <http://tools.ietf.org/html/rfc3977#section-7.1>

        Returns:
            The UTC time according to the server as a datetime object.

        Raises:
            NNTPDataError: If the timestamp can't be parsed.
        """
        _, message = self._expect(self.command("DATE"), "DATE", ResponseCode.SERVER_DATE)
        with _parsing("DATE"):
            return utils.parse_date(message.split(None, 1)[0] if message else "")

    def help(self) -> str:
        """HELP command.

        Provides a short summary of commands that are understood by the usenet
        server.

        See <http://tools.ietf.org/html/rfc3977#section-7.2>

        Returns:
            The help text from the server, lines separated by newlines.
        """
        with self._transaction():
            self._expect(self.command("HELP"), "HELP", ResponseCode.HELP_FOLLOWS)
            return "\n".join(self._lines("HELP", str))

    def newgroups(self, date: datetime, gmt: bool = True) -> list[GroupListItem]:
        """NEWGROUPS command.

        Retrieves a list of newsgroups created on the server since the
        specified date.

        See <http://tools.ietf.org/html/rfc3977#section-7.3>

        Args:
            date: Datetime object giving 'created since'
            gmt: The date is given in GMT, otherwise it is given in the
                server's local time.

        Returns:
            The name, high water mark, low water mark and posting permission
            of each new newsgroup.

        Note: When gmt is set a naive date is assumed to be GMT already and
            an aware date is converted to GMT.
        """
        args = utils.format_date(date, gmt)

        with self._transaction():
            status = self.command("NEWGROUPS", args)
            self._expect(status, "NEWGROUPS", ResponseCode.NEW_GROUPS_FOLLOW)
            return self._lines("NEWGROUPS", utils.parse_group_list_item)

    def newnews(
        self, wildmat: str, date: datetime, gmt: bool = True
    ) -> list[MessageID]:
        """NEWNEWS command.

        Retrieves a list of message-ids for articles created since the
        specified date for newsgroups with names that match the given
        wildmat.

        See <http://tools.ietf.org/html/rfc3977#section-7.4>

        Args:
            wildmat: Glob matching newsgroups of interest.
            date: Datetime object giving 'created since'
            gmt: The date is given in GMT, see newgroups().

        Returns:
            The message-id of each new article.

        Raises:
            NNTPValidationError: If the wildmat is empty.
        """
        if not wildmat:
            raise NNTPValidationError("Empty wildmat")
        args = f"{wildmat} {utils.format_date(date, gmt)}"

        with self._transaction():
            status = self.command("NEWNEWS", args)
            self._expect(status, "NEWNEWS", ResponseCode.NEW_ARTICLES_FOLLOW)
            return self._lines("NEWNEWS", lambda line: MessageID(line.strip()))

    # list commands
    def _list(
        self, keyword: Union[str, None], arg: Union[str, None], parse: Callable[[str], T]
    ) -> list[T]:
        verb = f"LIST {keyword}" if keyword else "LIST"
        with self._transaction():
            status = self.command(verb, arg)
            self._expect(status, verb, ResponseCode.INFORMATION_FOLLOWS)
            return self._lines(verb, parse)

    def list_active(self, wildmat: Union[str, None] = None) -> list[GroupListItem]:
        """LIST ACTIVE command.

        Retrieves a list of active newsgroups that match the specified
        wildmat.

        See <http://tools.ietf.org/html/rfc3977#section-7.6.3>

        Args:
            wildmat: Glob matching newsgroups of interest, all newsgroups
                when None.

        Returns:
            The name, high water mark, low water mark and posting permission
            of each newsgroup.
        """
        return self._list("ACTIVE", wildmat, utils.parse_group_list_item)

    def list_active_times(self) -> list[ActiveTime]:
        """LIST ACTIVE.TIMES command.

        Retrieves a list of newsgroups including the creation time and who
        created them.

        See <http://tools.ietf.org/html/rfc3977#section-7.6.4>
        """
        return self._list("ACTIVE.TIMES", None, utils.parse_active_time)

    def list_newsgroups(
        self, wildmat: Union[str, None] = None
    ) -> list[GroupDescriptionListItem]:
        """LIST NEWSGROUPS command.

        Retrieves a list of newsgroups including the name and a short
        description.

        See <http://tools.ietf.org/html/rfc3977#section-7.6.6>

        Args:
            wildmat: Glob matching newsgroups of interest.
        """
        return self._list("NEWSGROUPS", wildmat, utils.parse_group_description)

    def list_overview_fmt(self) -> list[OverviewFieldFormat]:
        """LIST OVERVIEW.FMT command.

        Returns a description of the fields returned by OVER and XOVER, in
        the order they appear. The first seven are always Subject, From,
        Date, Message-ID, References, Bytes and Lines.

        See <https://tools.ietf.org/html/rfc3977#section-8.4>

        Raises:
            NNTPDataError: If the fixed fields are missing or a field
                description can't be parsed.
        """
        lines = self._list("OVERVIEW.FMT", None, str.strip)
        with _parsing("LIST OVERVIEW.FMT"):
            return utils.parse_overview_fmt(lines)

    def list_headers(
        self, variant: Literal["MSGID", "RANGE", None] = None
    ) -> HeaderFields:
        """LIST HEADERS command.

        Returns a list of fields that may be retrieved using the HDR command.

        See <https://tools.ietf.org/html/rfc3977#section-8.6>

        Args:
            variant: The string 'MSGID' or 'RANGE' or None (the default).
                Different variants of the HDR request may return a different
                fields.

        Returns:
            Whether any header can be retrieved, and the names of the fields
            the server lists.
        """
        if variant not in ("MSGID", "RANGE", None):
            raise NNTPValidationError(f"Invalid LIST HEADERS variant {variant!r}")

        lines = self._list("HEADERS", variant, str.strip)
        if lines and lines[0] == ":":
            return HeaderFields(True, tuple(lines[1:]))
        return HeaderFields(False, tuple(lines))

    @overload
    def list(
        self,
        keyword: Literal["ACTIVE", None] = None,
        arg: Union[str, None] = None,
    ) -> list[GroupListItem]: ...

    @overload
    def list(
        self,
        keyword: Literal["ACTIVE.TIMES"],
    ) -> list[ActiveTime]: ...

    @overload
    def list(
        self,
        keyword: Literal["HEADERS"],
        arg: Literal["MSGID", "RANGE", None] = None,
    ) -> HeaderFields: ...

    @overload
    def list(
        self,
        keyword: Literal["NEWSGROUPS"],
        arg: Union[str, None] = None,
    ) -> list[GroupDescriptionListItem]: ...

    @overload
    def list(
        self,
        keyword: Literal["OVERVIEW.FMT"],
    ) -> list[OverviewFieldFormat]: ...

    def list(
        self,
        keyword: Union[str, None] = None,
        arg: Union[str, None] = None,
    ) -> Any:
        """LIST command.

        Without a keyword the plain LIST command is sent, which is the same
        as LIST ACTIVE without a wildmat. Otherwise a wrapper for all of the
        other list commands.

        Args:
            keyword: Information requested.
            arg: Wildmat or keyword specific argument.

        Returns:
            Depends on which list command is specified by the keyword. See the
            list function that corresponds to that keyword.

        Note: Keywords supported by this function include ACTIVE, ACTIVE.TIMES,
            HEADERS, NEWSGROUPS and OVERVIEW.FMT.

        Raises:
            NotImplementedError: For unsupported keywords.
        """
        if keyword:
            keyword = keyword.upper()

        if keyword is None:
            return self._list(None, None, utils.parse_group_list_item)
        if keyword == "ACTIVE":
            return self.list_active(arg)
        if keyword == "ACTIVE.TIMES":
            return self.list_active_times()
        if keyword == "HEADERS":
            return self.list_headers(arg)  # type: ignore[arg-type]
        if keyword == "NEWSGROUPS":
            return self.list_newsgroups(arg)
        if keyword == "OVERVIEW.FMT":
            return self.list_overview_fmt()

        raise NotImplementedError

    # group and article selection commands
    def group(self, name: str) -> GroupStat:
        """GROUP command.

        Selects a newsgroup as the currently selected newsgroup and returns
        summary information about it.

        See <https://tools.ietf.org/html/rfc3977#section-6.1.1>

        Args:
            name: The group name.

        Returns:
            The estimated total articles in the group, the articles numbers of
            the first and last article and the group name.

        Raises:
            NNTPTemporaryError: If no such newsgroup exists.
            NNTPDataError: If the status message can't be parsed.
        """
        if not name or len(name.split()) != 1:
            raise NNTPValidationError(f"Invalid group name {name!r}")

        _, message = self._expect(
            self.command("GROUP", name), "GROUP", ResponseCode.GROUP_SELECTED
        )
        with _parsing("GROUP"):
            return utils.parse_group_stat(message)

    def listgroup(
        self, name: Union[str, None] = None, range: RangeArg = None
    ) -> tuple[GroupStat, list[int]]:
        """LISTGROUP command.

        Selects a newsgroup, like GROUP, and lists the numbers of its
        articles.

        See <https://tools.ietf.org/html/rfc3977#section-6.1.2>

        Args:
            name: The group name, the currently selected group when None.
            range: Only list the articles in this range. A group name is
                required when a range is given.

        Returns:
            The group summary and the article numbers in the order given.

        Raises:
            NNTPDataError: If a line is not a plain article number.
        """
        args = GroupOptions(name, range).argument()

        with self._transaction():
            _, message = self._expect(
                self.command("LISTGROUP", args), "LISTGROUP", ResponseCode.GROUP_SELECTED
            )
            with self._block() as reader, _parsing("LISTGROUP"):
                stat = utils.parse_group_stat(message)
                numbers = [
                    utils.parse_number(line.strip(), "article number")
                    for line in self.transport.text_lines(reader)
                ]
        return stat, numbers

    def _move(self, verb: str) -> Article:
        _, message = self._expect(
            self.command(verb), verb, ResponseCode.ARTICLE_SELECTED
        )
        with _parsing(verb):
            number, msgid = utils.parse_article_status(message)
        return Article(number, msgid)

    def last(self) -> Article:
        """LAST command.

        Sets the current article number to the previous article in the current
        newsgroup.

        See <https://tools.ietf.org/html/rfc3977#section-6.1.3>

        Returns:
            The new current article, number and message-id only.

        Raises:
            NNTPTemporaryError: If no such article exists or the currently
                selected newsgroup is invalid.
        """
        return self._move("LAST")

    def next(self) -> Article:
        """NEXT command.

        Sets the current article number to the next article in the current
        newsgroup.

        See <https://tools.ietf.org/html/rfc3977#section-6.1.4>

        Returns:
            The new current article, number and message-id only.
        """
        return self._move("NEXT")

    def _article(
        self,
        verb: str,
        code: int,
        options: ArticleOptions,
        header: bool = False,
        body: bool = False,
    ) -> Article:
        args = options.argument()

        with self._transaction():
            _, message = self._expect(self.command(verb, args), verb, code)
            if not header and not body:
                with _parsing(verb):
                    number, msgid = utils.parse_article_status(message)
                return Article(number, msgid)

            reader = self.transport.dot_reader()
            try:
                with _parsing(verb):
                    number, msgid = utils.parse_article_status(message)
                    hdrs = self.transport.read_header_block(reader) if header else None
            except NNTPTransportError:
                raise
            except BaseException:
                reader.drain()
                raise

            if not body:
                reader.drain()
                return Article(number, msgid, hdrs)

            self._pending = reader
            return Article(number, msgid, hdrs, reader)

    def article(
        self, message_id: Union[str, None] = None, number: Union[int, None] = None
    ) -> Article:
        """ARTICLE command.

        Selects an article according to the arguments and presents the entire
        article (that is, the headers, an empty line, and the body, in that
        order) to the client.

        See <https://tools.ietf.org/html/rfc3977#section-6.2.1>

        Args:
            message_id: A message-id, with or without the "<" and ">".
            number: An article number in the current group, only used if no
                message-id is given. The current article is used if neither
                is given.

        Returns:
            The article with its headers and a live reader of its body. The
            body should be read to the end (or the article used as a context
            manager) before the next command; if it is not, it is drained
            when the next command is sent.

        Raises:
            NNTPValidationError: If the message-id is malformed.
            NNTPTemporaryError: If no such article exists.
        """
        options = ArticleOptions(message_id, number)
        return self._article(
            "ARTICLE", ResponseCode.ARTICLE_FOLLOWS, options, header=True, body=True
        )

    def head(
        self, message_id: Union[str, None] = None, number: Union[int, None] = None
    ) -> Article:
        """HEAD command.

        Identical to the ARTICLE command except that only the headers are
        presented.

        See <https://tools.ietf.org/html/rfc3977#section-6.2.2>
        """
        options = ArticleOptions(message_id, number)
        return self._article("HEAD", ResponseCode.HEAD_FOLLOWS, options, header=True)

    def body(
        self, message_id: Union[str, None] = None, number: Union[int, None] = None
    ) -> Article:
        """BODY command.

        Identical to the ARTICLE command except that only the body is
        presented.

        See <https://tools.ietf.org/html/rfc3977#section-6.2.3>
        """
        options = ArticleOptions(message_id, number)
        return self._article("BODY", ResponseCode.BODY_FOLLOWS, options, body=True)

    def stat(
        self, message_id: Union[str, None] = None, number: Union[int, None] = None
    ) -> Article:
        """STAT command.

        Identical to the ARTICLE command except that no text is presented,
        only the article number and message-id.

        See <https://tools.ietf.org/html/rfc3977#section-6.2.4>
        """
        options = ArticleOptions(message_id, number)
        return self._article("STAT", ResponseCode.ARTICLE_SELECTED, options)

    # overview commands
    def _over(
        self, verb: str, message_id: Union[str, None], range: RangeArg
    ) -> list[ArticleOverview]:
        args = OverOptions(message_id, range).argument()

        with self._transaction():
            status = self.command(verb, args)
            self._expect(status, verb, ResponseCode.OVERVIEW_FOLLOWS)
            with self._block() as reader, _parsing(verb):
                return [
                    utils.parse_overview(line)
                    for line in self.transport.text_lines(reader)
                ]

    def over(
        self, message_id: Union[str, None] = None, range: RangeArg = None
    ) -> list[ArticleOverview]:
        """OVER command.

        Returns the overview database entries of the article(s) specified.

        See <https://tools.ietf.org/html/rfc3977#section-8.3>

        Args:
            message_id: A message-id, takes priority over range.
            range: A Range, an article number, or a tuple specifying a
                range of article numbers in the form (first, [last]). If last
                is omitted then all articles after first are included. The
                current article is used if neither is given.

        Returns:
            The overview of each article, in the order given by the server.
            The names of any extra fields are given by list_overview_fmt().

        Raises:
            NNTPDataError: If an overview line can't be parsed.
        """
        return self._over("OVER", message_id, range)

    def xover(
        self, message_id: Union[str, None] = None, range: RangeArg = None
    ) -> list[ArticleOverview]:
        """XOVER command.

        The RFC 2980 version of OVER, see over().

        <http://tools.ietf.org/html/rfc2980#section-2.8>
        """
        return self._over("XOVER", message_id, range)

    def _hdr(
        self,
        verb: str,
        code: int,
        field: str,
        message_id: Union[str, None],
        range: RangeArg,
    ) -> list[tuple[int, str]]:
        if not field or len(field.split()) != 1:
            raise NNTPValidationError(f"Invalid header field {field!r}")
        args = field
        selection = OverOptions(message_id, range).argument()
        if selection:
            args += " " + selection

        def parse(line: str) -> tuple[int, str]:
            number, _, value = line.partition(" ")
            # XHDR echoes the message-id when one selected the article
            if number.startswith("<") and number.endswith(">"):
                return 0, value.strip()
            return utils.parse_number(number, "article number"), value.strip()

        with self._transaction():
            self._expect(self.command(verb, args), verb, code)
            return self._lines(verb, parse)

    def hdr(
        self,
        field: str,
        message_id: Union[str, None] = None,
        range: RangeArg = None,
    ) -> list[tuple[int, str]]:
        """HDR command.

        Provides access to specific fields from an article specified by
        message-id, or from a specified article or range of articles in the
        currently selected newsgroup.

        See <https://tools.ietf.org/html/rfc3977#section-8.5>

        Args:
            field: The header field (or ":metadata" item) to retrieve.
            message_id: A message-id, takes priority over range.
            range: See over().

        Returns:
            The article number (0 when selected by message-id) and the value
            of the field for each article.
        """
        return self._hdr("HDR", ResponseCode.HEADERS_FOLLOW, field, message_id, range)

    def xhdr(
        self,
        field: str,
        message_id: Union[str, None] = None,
        range: RangeArg = None,
    ) -> list[tuple[int, str]]:
        """XHDR command.

        The RFC 2980 version of HDR, see hdr().

        See <https://tools.ietf.org/html/rfc2980#section-2.6>
        """
        return self._hdr("XHDR", ResponseCode.HEAD_FOLLOWS, field, message_id, range)

    # posting commands
    def _body_chunks(self, body: Union[Body, None]) -> Iterable[bytes]:
        if body is None:
            return ()
        if isinstance(body, str):
            return (body.encode(self.encoding, self.errors),)
        if isinstance(body, bytes):
            return (body,)
        return body

    @staticmethod
    def _load_body(body: Union[Body, None]) -> Union[Body, None]:
        # a live body is drained by the next command, read it in first
        if isinstance(body, DotDecoder) and not body.finished:
            return body.read()
        return body

    def _send_article(self, article: Article, body: Union[Body, None]) -> None:
        header = HeaderDict(article.header or ())
        if article.message_id:
            header["Message-Id"] = article.message_id.full()

        writer = self.transport.dot_writer()
        writer.write(utils.unparse_headers(header).encode(self.encoding, self.errors))
        for chunk in self._body_chunks(body):
            writer.write(chunk)
        writer.close()

    @staticmethod
    def _check_message_id(article: Article) -> None:
        if article.message_id:
            article.message_id.full().validate_full()

    def post(self, article: Article) -> Union[MessageID, bool]:
        """POST command.

        See <https://tools.ietf.org/html/rfc3977#section-6.3.1>

        Args:
            article: The article to post. Its header is sent with every
                header name in canonical form, followed by an empty line and
                the body. If the article has a message-id it is sent as the
                Message-Id header.

        Returns:
            A value that evaluates to true if posting the message succeeded.
            (See note for further details)

        Raises:
            NNTPValidationError: If the article's message-id is malformed.
            NNTPTransportError: If sending the article fails. The connection
                is in an unknown state afterwards and should be closed.

        Note:
            Though not part of any specification it is common for usenet
            servers to return the message-id for a successfully posted message.
            If a message-id is identified in the response from the server then
            that message-id will be returned by the function, otherwise True
            will be returned.
        """
        self._check_message_id(article)

        with self._transaction():
            body = self._load_body(article.body)
            self._expect(self.command("POST"), "POST", ResponseCode.POSTING_SEND)
            self._send_article(article, body)
            code, message = self._expect(
                self.transport.read_status(), "POST", ResponseCode.POSTING_SUCCESS
            )

        # return message-id possible
        parts = message.split(None, 1)
        if parts and parts[0].startswith("<") and parts[0].endswith(">"):
            return MessageID(parts[0])

        return True

    def ihave(self, article: Article) -> bool:
        """IHAVE command.

        Offers an article to the server for transfer.

        See <https://tools.ietf.org/html/rfc3977#section-6.3.2>

        Args:
            article: The article to transfer, it must have a message-id. See
                post() for how it is sent.

        Returns:
            True once the server has accepted the article.

        Raises:
            NNTPValidationError: If the article has no, or a malformed,
                message-id.
            NNTPTemporaryError: If the server does not want the article or
                the transfer failed.
        """
        if not article.message_id:
            raise NNTPValidationError("IHAVE requires a message-id")
        self._check_message_id(article)

        with self._transaction():
            body = self._load_body(article.body)
            self._expect(
                self.command("IHAVE", article.message_id.full()),
                "IHAVE",
                ResponseCode.TRANSFER_SEND,
            )
            self._send_article(article, body)
            self._expect(
                self.transport.read_status(),
                "IHAVE",
                ResponseCode.TRANSFER_SUCCESS,
                ResponseCode.POSTING_SUCCESS,
            )
        return True
