"""Split repository URLs and pick the git ref they select."""

from mesospkg.exceptions import ArgumentError
from mesospkg.models import RepoLocation

REF_KEYS = ("ref", "h", "branch", "tag")


def split_url(url: str) -> RepoLocation:
    """Split a URL into base, query and fragment.

    Example:
        >>> split_url("https://host/repo.git?tag=1.7.3")
        RepoLocation(base='https://host/repo.git', query='tag=1.7.3', fragment='')

    """
    remainder, _, fragment = url.partition("#")
    base, _, query = remainder.partition("?")
    return RepoLocation(base=base, query=query, fragment=fragment)


def ref_from_query(query: str) -> str | None:
    """Return the ref named by a query like 'tag=1.7.3', or the query itself."""
    if not query:
        return None
    key, sep, value = query.partition("=")
    if sep and key in REF_KEYS:
        return value
    return query


def resolve_repo(url: str, branch: str | None = None) -> tuple[str, str | None]:
    """Return the clone URL and the ref to check out.

    An explicit branch wins over a ref carried in the query.

    Raises:
        ArgumentError: If the URL carries a fragment

    """
    location = split_url(url)
    if location.fragment:
        msg = (
            f"Setting a fragment (#{location.fragment}) does nothing. "
            "Use the query (?) to select a ref instead."
        )
        raise ArgumentError(msg)
    return location.base, branch or ref_from_query(location.query)
