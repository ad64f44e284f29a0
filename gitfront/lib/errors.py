"""
Typed failures for gitfront.

Every failure carries the structured detail (counts, names) a caller needs
to render its own message, plus a ready-made pluralized message via str().
"""


def plural(count: int, singular: str, plural_form: str | None = None) -> str:
    """Return '1 file' / '3 files' style text."""
    if count == 1:
        return f"1 {singular}"
    return f"{count} {plural_form or singular + 's'}"


class GitfrontError(Exception):
    """Base class for all gitfront failures."""


class GitCommandError(GitfrontError):
    """A git invocation failed."""

    def __init__(self, args: list[str], returncode: int, stderr: str = ""):
        self.git_args = args
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip() or f"exit status {returncode}"
        super().__init__(f"git {' '.join(args)}: {detail}")


class SettingsError(GitfrontError):
    """gitfront's own settings file is invalid."""


# Push target resolution

class NoDestination(GitfrontError):
    def __init__(self):
        super().__init__('no destination given and no remote named "origin" found')


class AmbiguousDestination(GitfrontError):
    def __init__(self, source: str = ""):
        self.source = source
        super().__init__(
            "cannot infer destination (source is not a ref). "
            "Use -d to specify destination ref."
        )


# Remote ref verification

class MalformedListing(GitfrontError):
    """A git ls-remote line did not start with a SHA-1 and a tab."""

    def __init__(self, lineno: int, line: bytes):
        self.lineno = lineno
        self.line = line
        super().__init__(f"parse git ls-remote: line {lineno} must start with SHA1")


class RemoteUnreachable(GitfrontError):
    def __init__(self, remote: str, ref: str, detail: str = ""):
        self.remote = remote
        self.ref = ref
        self.detail = detail
        super().__init__(f"verify remote ref {ref}: {detail or 'git ls-remote failed'}")


class RefNotFound(GitfrontError):
    def __init__(self, remote: str, ref: str):
        self.remote = remote
        self.ref = ref
        super().__init__(
            f"remote {remote} does not have ref {ref} "
            f"(use --create to push a new ref)"
        )


# Gerrit magic refs

class MalformedMessage(GitfrontError):
    def __init__(self, raw: str, reason: str):
        self.raw = raw
        self.reason = reason
        super().__init__(f"invalid message encoding {raw!r}: {reason}")


class InvalidGerritOptions(GitfrontError):
    """Review options contain a value that cannot be written into a ref."""


# Status parsing

class StatusParseError(GitfrontError):
    """One rejected line of status display output.

    kind is one of "format", "orphan_source" or "duplicate".
    """

    def __init__(self, lineno: int, kind: str, message: str):
        self.lineno = lineno
        self.kind = kind
        super().__init__(f"line {lineno}: {message}")


class StatusFormatError(GitfrontError):
    """git status --porcelain output could not be read."""


# Commit change-set selection

class UnmergedChanges(GitfrontError):
    def __init__(self, count: int):
        self.count = count
        super().__init__(f"{plural(count, 'unmerged file')}; see 'gf status'")


class NothingChanged(GitfrontError):
    def __init__(self, missing: int = 0):
        self.missing = missing
        if missing:
            msg = f"nothing changed ({plural(missing, 'missing file')}; see 'gf status')"
        else:
            msg = "nothing changed"
        super().__init__(msg)


class StagedMissingFiles(GitfrontError):
    def __init__(self, count: int):
        self.count = count
        super().__init__(
            f"git has staged changes for {plural(count, 'missing file')}; see 'gf status'"
        )
