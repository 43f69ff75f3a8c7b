"""
DOM heuristics for pulling post data out of a rendered page.

Every field is recovered by an ordered list of independent strategies.
A strategy takes the parsed page and returns a value or None; `first_match`
folds the list left to right and stops at the first value. None of this
touches a browser, so it runs the same against a live snapshot or a
fixture file.
"""
from typing import Callable, List, Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Comment

from core.config import HeuristicsConfig, Placeholders
from models.extraction_models import PageData
from services.processing.utils import clean_text

Strategy = Callable[[BeautifulSoup], Optional[str]]

# Text inside these never renders as visible content
_INVISIBLE_PARENTS = {"script", "style", "noscript", "template", "title"}


def first_match(strategies: List[Strategy], soup: BeautifulSoup) -> Optional[str]:
    """Return the first non-empty value produced by `strategies`, in order."""
    for strategy in strategies:
        value = strategy(soup)
        if value:
            return value
    return None


# --- Caption ---------------------------------------------------------------

def selector_text(selector: str) -> Strategy:
    """Text of the first element matching a CSS selector."""
    def strategy(soup: BeautifulSoup) -> Optional[str]:
        element = soup.select_one(selector)
        if element is None:
            return None
        return clean_text(element.get_text(separator=' ')) or None

    strategy.__name__ = f"selector_text[{selector}]"
    return strategy


def meta_content(prop: str) -> Strategy:
    """Content of a <meta property=...> tag."""
    def strategy(soup: BeautifulSoup) -> Optional[str]:
        meta = soup.find('meta', attrs={'property': prop})
        if meta is None:
            return None
        return clean_text(meta.get('content', '')) or None

    strategy.__name__ = f"meta_content[{prop}]"
    return strategy


def caption_strategies() -> List[Strategy]:
    strategies = [selector_text(s) for s in HeuristicsConfig.CAPTION_SELECTORS]
    strategies.append(meta_content(HeuristicsConfig.CAPTION_META_PROPERTY))
    return strategies


# --- Video URL -------------------------------------------------------------

def _resolve(value: str, base_url: str) -> Optional[str]:
    value = value.strip()
    if not value or value.lower().startswith(HeuristicsConfig.SKIPPED_URL_SCHEMES):
        return None
    return urljoin(base_url, value)


def looks_like_video(url: str) -> bool:
    """True for URLs with a video file extension or Instagram's video CDN paths."""
    path = urlparse(url).path.lower()
    if path.endswith(HeuristicsConfig.VIDEO_EXTENSIONS):
        return True
    return any(marker in url for marker in HeuristicsConfig.VIDEO_CDN_MARKERS)


def tag_attribute(tag: str, attribute: str, base_url: str) -> Strategy:
    """First usable `attribute` on any <tag> element."""
    def strategy(soup: BeautifulSoup) -> Optional[str]:
        for element in soup.find_all(tag, attrs={attribute: True}):
            resolved = _resolve(element[attribute], base_url)
            if resolved:
                return resolved
        return None

    strategy.__name__ = f"tag_attribute[{tag}@{attribute}]"
    return strategy


def media_attribute_scan(base_url: str) -> Strategy:
    """Broad scan of every src/href on the page for something video-shaped."""
    def strategy(soup: BeautifulSoup) -> Optional[str]:
        for element in soup.find_all(True):
            for attribute in ('src', 'href'):
                value = element.get(attribute)
                if not isinstance(value, str):
                    continue
                resolved = _resolve(value, base_url)
                if resolved and looks_like_video(resolved):
                    return resolved
        return None

    return strategy


def video_strategies(base_url: str) -> List[Strategy]:
    return [
        tag_attribute('video', 'src', base_url),
        tag_attribute('source', 'src', base_url),
        media_attribute_scan(base_url),
    ]


# --- Engagement ------------------------------------------------------------

def keyword_text(keywords: tuple) -> Strategy:
    """
    Short visible text containing a digit and one of `keywords`,
    e.g. "1,204 likes". Instagram rarely renders these for logged-out
    visitors, so this mostly comes back empty.
    """
    def strategy(soup: BeautifulSoup) -> Optional[str]:
        for node in soup.find_all(string=True):
            if isinstance(node, Comment) or node.parent.name in _INVISIBLE_PARENTS:
                continue
            text = clean_text(str(node))
            if not text or len(text) > HeuristicsConfig.METRIC_MAX_TEXT_LENGTH:
                continue
            if not any(ch.isdigit() for ch in text):
                continue
            lowered = text.lower()
            if any(keyword in lowered for keyword in keywords):
                return text
        return None

    strategy.__name__ = f"keyword_text[{'/'.join(keywords)}]"
    return strategy


def extract_page_data(html: str, base_url: str) -> PageData:
    """Run every heuristic chain over a page snapshot."""
    soup = BeautifulSoup(html, 'html.parser')

    caption = first_match(caption_strategies(), soup)
    video_url = first_match(video_strategies(base_url), soup)
    unavailable = Placeholders.METRIC_UNAVAILABLE

    return PageData(
        caption=caption or Placeholders.CAPTION_NOT_FOUND,
        video_url=video_url,
        view_count=first_match([keyword_text(HeuristicsConfig.VIEW_KEYWORDS)], soup) or unavailable,
        like_count=first_match([keyword_text(HeuristicsConfig.LIKE_KEYWORDS)], soup) or unavailable,
        comment_count=first_match([keyword_text(HeuristicsConfig.COMMENT_KEYWORDS)], soup) or unavailable,
    )
