"""Dedup index keyed by job link, owned by a single crawl invocation."""


class DedupIndex:
    """
    Set of links already merged into a crawl result.

    No eviction and no size bound; one index lives exactly as long as one
    crawl. The empty string is never a valid key.
    """

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def contains(self, link: str) -> bool:
        return link in self._seen

    def insert(self, link: str) -> None:
        if not link:
            raise ValueError("Empty link is not a valid dedup key")
        self._seen.add(link)

    def admit(self, link: str) -> bool:
        """
        Insert link if it is non-empty and unseen.

        This is the merge primitive the orchestrator uses.

        Returns:
            True if the link was inserted (caller should keep the record)
        """
        if not link or self.contains(link):
            return False
        self.insert(link)
        return True

    def __contains__(self, link: object) -> bool:
        return link in self._seen

    def __len__(self) -> int:
        return len(self._seen)
