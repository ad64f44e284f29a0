"""
Gerrit magic ref codec.

Pushing to refs/for/<branch> asks Gerrit to create a review. Review options
ride along after a '%':

    refs/for/main%no-publish-comments,m=Fix+the+build,r=a@example.com,l=Verified+1

Options are comma separated, either "key" or "key=value". A value can't
contain a comma; multi-valued options repeat the key. Only the m/message
value is escaped (form encoding); Gerrit reads both '+' and '_' in it as
spaces.
"""

import logging
import re
from urllib.parse import quote_plus, unquote_to_bytes

from pydantic import BaseModel, Field, field_validator

from gitfront.lib.errors import InvalidGerritOptions, MalformedMessage

logger = logging.getLogger(__name__)

MAGIC_PREFIX = "refs/for/"
MESSAGE_KEYS = ("m", "message")
NOTIFY_MODES = ("NONE", "OWNER", "OWNER_REVIEWERS", "ALL")

_BAD_ESCAPE = re.compile(r'%(?![0-9A-Fa-f]{2})')
# Raw option values: printable ASCII minus the separators
_WIRE_SAFE = re.compile(r'^[!-~]+$')

WireOptions = dict[str, list[str | None]]


def split_addresses(values: list[str]) -> list[str]:
    """Flatten entries that are themselves comma-separated lists."""
    return [part.strip() for value in values for part in value.split(",") if part.strip()]


def _check_wire_value(value: str) -> str:
    if not _WIRE_SAFE.match(value) or "," in value or "%" in value:
        raise ValueError(f"{value!r} can't be written into a ref")
    return value


class GerritOptions(BaseModel):
    """Review options for a push to refs/for/<branch>.

    Absent fields fall back to the server's defaults, except
    publish_comments, which is always sent.
    """
    publish_comments: bool = False
    message: str | None = None
    reviewers: list[str] = Field(default_factory=list)
    cc: list[str] = Field(default_factory=list)
    notify: str | None = None
    notify_to: list[str] = Field(default_factory=list)
    notify_cc: list[str] = Field(default_factory=list)
    notify_bcc: list[str] = Field(default_factory=list)
    topic: str | None = None
    labels: list[str] = Field(default_factory=list)

    @field_validator("reviewers", "cc", "notify_to", "notify_cc", "notify_bcc")
    @classmethod
    def _addresses_wire_safe(cls, v: list[str]) -> list[str]:
        for address in split_addresses(v):
            _check_wire_value(address)
        return v

    @field_validator("labels")
    @classmethod
    def _labels_wire_safe(cls, v: list[str]) -> list[str]:
        for label in v:
            _check_wire_value(label)
        return v

    @field_validator("topic")
    @classmethod
    def _topic_wire_safe(cls, v: str | None) -> str | None:
        if v:
            _check_wire_value(v)
        return v

    @field_validator("notify")
    @classmethod
    def _notify_mode(cls, v: str | None) -> str | None:
        if v and v.upper() not in NOTIFY_MODES:
            raise ValueError(f"notify must be one of {', '.join(NOTIFY_MODES)}")
        return v.upper() if v else v

    def wire_pairs(self) -> list[tuple[str, str | None]]:
        """Options in wire order as (key, unescaped value) pairs."""
        pairs: list[tuple[str, str | None]] = [
            ("publish-comments" if self.publish_comments else "no-publish-comments", None),
        ]
        if self.message:
            pairs.append(("m", self.message))
        pairs += [("r", a) for a in split_addresses(self.reviewers)]
        pairs += [("cc", a) for a in split_addresses(self.cc)]
        if self.notify:
            pairs.append(("notify", self.notify))
        pairs += [("notify-to", a) for a in split_addresses(self.notify_to)]
        pairs += [("notify-cc", a) for a in split_addresses(self.notify_cc)]
        pairs += [("notify-bcc", a) for a in split_addresses(self.notify_bcc)]
        if self.topic:
            pairs.append(("topic", self.topic))
        pairs += [("l", label) for label in self.labels]
        return pairs

    def to_wire_options(self) -> WireOptions:
        """The option map decode() returns for a ref built from these options."""
        options: WireOptions = {}
        for key, value in self.wire_pairs():
            options.setdefault(key, []).append(value)
        return options


def escape_message(message: str) -> str:
    """
    Form-encode a message. '_' is escaped too since Gerrit reads it as a space.

    Raises:
        InvalidGerritOptions: message isn't encodable as UTF-8
    """
    try:
        return quote_plus(message, safe="").replace("_", "%5F")
    except UnicodeEncodeError as e:
        raise InvalidGerritOptions(f"message is not valid UTF-8: {e.reason}") from None


def unescape_message(raw: str) -> str:
    """
    Decode an m/message value.

    Raises:
        MalformedMessage: bad percent escape or invalid UTF-8
    """
    if _BAD_ESCAPE.search(raw):
        raise MalformedMessage(raw, "invalid percent escape")
    spaced = raw.replace("_", " ").replace("+", " ")
    try:
        return unquote_to_bytes(spaced).decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedMessage(raw, f"not UTF-8: {e.reason}") from None


def encode(branch: str, options: GerritOptions | None = None) -> str:
    """Build the refs/for/ push ref for branch carrying options."""
    if not branch or "%" in branch:
        raise InvalidGerritOptions(f"can't build a review ref for branch {branch!r}")
    if options is None:
        options = GerritOptions()
    parts = []
    for key, value in options.wire_pairs():
        if value is None:
            parts.append(key)
        elif key in MESSAGE_KEYS:
            parts.append(f"{key}={escape_message(value)}")
        else:
            parts.append(f"{key}={value}")
    ref = MAGIC_PREFIX + branch + "%" + ",".join(parts)
    logger.debug(f"review ref: {ref}")
    return ref


def decode(ref: str) -> tuple[str, WireOptions]:
    """
    Split a magic ref into its base ref and options.

    A bare "key" is recorded as None, which is distinct from "key=".
    Repeated keys keep every value in order.

    Raises:
        MalformedMessage: an m/message value can't be decoded
    """
    base, sep, query = ref.partition("%")
    options: WireOptions = {}
    if not sep or not query:
        return base, options

    segments = query.split(",")
    if segments[-1] == "":
        # Trailing comma
        segments.pop()
    for segment in segments:
        key, eq, value = segment.partition("=")
        if not eq:
            options.setdefault(key, []).append(None)
            continue
        if key in MESSAGE_KEYS:
            value = unescape_message(value)
        options.setdefault(key, []).append(value)
    return base, options
