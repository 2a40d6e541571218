"""
Report assembly.

Turns the aggregated sites and the cross-site tag set into the nested,
JSON-serializable report:

    {
        "padron": ...,
        "sites": {site: {"questions", "words", "tags", "chatty_tags"}},
        "tags": {tag: {"questions", "words"}},
        "totals": {"chatty_sites": [...], "chatty_tags": [...]}
    }
"""

from typing import Any, Dict, List, Optional

from .stats.ranking import top_k_by_ratio
from .stats.site_stat import SiteStat
from .stats.tag_stat import TagStatSet

DEFAULT_TOP_N = 10


def site_key(site: SiteStat, index: int) -> str:
    """Report key of a site: its name, or its position in the site list."""
    return site.name if site.name is not None else str(index)


def site_keys(sites: List[SiteStat]) -> List[str]:
    """
    Report keys of all sites.

    An unnamed site whose positional key is already the name of another
    site gets a "#" prefix until the key is unused, so no entry overwrites
    another.
    """
    names = {site.name for site in sites if site.name is not None}
    keys = []
    for index, site in enumerate(sites):
        key = site_key(site, index)
        if site.name is None:
            while key in names:
                key = "#" + key
            names.add(key)
        keys.append(key)
    return keys


def build_report(
    sites: List[SiteStat],
    global_tags: TagStatSet,
    padron: Optional[Any] = None,
    top_n: int = DEFAULT_TOP_N,
) -> Dict[str, Any]:
    """
    Assemble the report.

    Args:
        sites: Aggregated sites, in report order
        global_tags: Tags aggregated across all sites
        padron: Opaque identifier copied to the top of the report
        top_n: Length of every "chatty" ranking

    Returns:
        The nested report dictionary
    """
    keyed_sites = list(zip(site_keys(sites), sites))

    chatty_sites = top_k_by_ratio(((key, site.ratio()) for key, site in keyed_sites), top_n)

    return {
        "padron": padron,
        "sites": {key: site.to_dict(top_n) for key, site in keyed_sites},
        "tags": global_tags.to_dict(),
        "totals": {
            "chatty_sites": chatty_sites,
            "chatty_tags": global_tags.top_k(top_n),
        },
    }
