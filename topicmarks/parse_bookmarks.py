from bs4 import BeautifulSoup
from typing import List


def extract_urls(html: str) -> List[str]:
    """
    Collect link targets from a Netscape/Safari/Chrome bookmarks export, which uses
    <DL>/<DT>/<H3> for folders and <DT><A HREF=...> for links. Folder structure is
    ignored; hrefs come back in document order with repeats dropped.
    """
    soup = BeautifulSoup(html, "html.parser")
    results: List[str] = []
    seen = set()

    for a in soup.find_all("a"):
        if not a.has_attr("href"):
            continue
        href = (a["href"] or "").strip()
        if not href or href in seen:
            continue
        seen.add(href)
        results.append(href)

    return results
