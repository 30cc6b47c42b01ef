"""Defence sites without feeds, scraped with per-site CSS selectors."""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from ambos.concurrency import gather_partial
from ambos.data import Article, ArticleSource, Platform, Usage
from ambos.http import http_get
from ambos.search.merge import deduplicate_by_url, filter_by_terms, sort_by_published
from ambos.text import isoformat_utc, parse_timestamp, utcnow

PROVIDER = "scraper"
TITLE_CHARS = 200
DESCRIPTION_CHARS = 500

HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    "Accept": "text/html,application/xhtml+xml",
    "Accept-Language": "it-IT,it;q=0.9",
}

ITALIAN_MONTHS = {
    "gennaio": 1,
    "febbraio": 2,
    "marzo": 3,
    "aprile": 4,
    "maggio": 5,
    "giugno": 6,
    "luglio": 7,
    "agosto": 8,
    "settembre": 9,
    "ottobre": 10,
    "novembre": 11,
    "dicembre": 12,
}

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")
_NUMERIC_DATE_RE = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})")
_ITALIAN_DATE_RE = re.compile(r"(\d{1,2})\s+([a-zà]+)\s+(\d{4})")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScrapedSite:
    """A listing page and the selectors that locate its articles.

    ``item`` selects one element per article; the other selectors are
    applied inside it.
    """

    name: str
    url: str
    item: str
    title: str
    link: str
    date: str | None = None
    description: str | None = None
    country: str | None = "IT"


DEFAULT_SITES: tuple[ScrapedSite, ...] = (
    ScrapedSite(
        name="Ares Difesa",
        url="https://www.aresdifesa.it/",
        item="article.post",
        title="h2.entry-title a",
        link="h2.entry-title a",
        date="time.entry-date",
        description="div.entry-summary",
    ),
    ScrapedSite(
        name="Aviation Report",
        url="https://www.aviation-report.com/",
        item="article",
        title="h2.entry-title a",
        link="h2.entry-title a",
        date="time.published",
        description="div.entry-content",
    ),
    ScrapedSite(
        name="StarMag",
        url="https://www.starmag.it/categoria/defense/",
        item="article.post",
        title="h2 a",
        link="h2 a",
        date="time",
        description="div.excerpt",
    ),
    ScrapedSite(
        name="Report Difesa",
        url="https://www.reportdifesa.it/",
        item="div.post-item",
        title="h3.post-title a",
        link="h3.post-title a",
        date="span.post-date",
        description="div.post-excerpt",
    ),
    ScrapedSite(
        name="Info Difesa",
        url="https://www.infodifesa.it/",
        item="article.post",
        title="h2.entry-title a",
        link="h2.entry-title a",
        date="time.entry-date",
        description="div.entry-summary",
    ),
    ScrapedSite(
        name="Ministero della Difesa",
        url="https://www.difesa.it/Primo_Piano/Pagine/default.aspx",
        item="div.ms-rtestate-field",
        title="a",
        link="a",
        date="div.ms-listlink",
        description="div.ms-rtestate-field",
    ),
    ScrapedSite(
        name="Stato Maggiore Difesa",
        url=(
            "https://www.difesa.it/SMD_/Staff/"
            "Ufficio_Pubblica_Informazione_e_Comunicazione/Pagine/News.aspx"
        ),
        item="div.ms-itmhover",
        title="a",
        link="a",
        date="td.ms-vb2",
        description="div.ms-rtestate-field",
    ),
    ScrapedSite(
        name="Esercito Italiano",
        url="https://www.esercito.difesa.it/comunicazione/Pagine/Notizie.aspx",
        item="div.ms-rtestate-field",
        title="strong a",
        link="strong a",
        date="em",
        description="p",
    ),
    ScrapedSite(
        name="Aeronautica Militare",
        url="https://www.aeronautica.difesa.it/Pagine/default.aspx",
        item="div.notizia",
        title="h3 a",
        link="h3 a",
        date="span.data",
        description="div.abstract",
    ),
    ScrapedSite(
        name="Marina Militare",
        url="https://www.marina.difesa.it/media-cultura/notiziario/Pagine/default.aspx",
        item="div.ms-rtestate-field",
        title="a",
        link="a",
        date="span",
        description="p",
    ),
    ScrapedSite(
        name="Direzione Nazionale Armamenti",
        url="https://www.difesa.it/DNA/Pagine/default.aspx",
        item="div.news-item",
        title="h4 a",
        link="h4 a",
        date="span.date",
        description="div.description",
    ),
)


def parse_italian_date(text: str | None) -> datetime | None:
    """Parse the date formats found on Italian sites.

    Accepts ISO dates, ``dd/mm/yyyy`` and ``12 marzo 2026``. Returns None
    for anything else.
    """
    if not text:
        return None
    text = text.strip()
    if _ISO_DATE_RE.match(text):
        return parse_timestamp(text) or parse_timestamp(text[:10])

    try:
        if match := _NUMERIC_DATE_RE.search(text):
            day, month, year = match.groups()
            return datetime(int(year), int(month), int(day), tzinfo=UTC)
        if match := _ITALIAN_DATE_RE.search(text.lower()):
            day, month_name, year = match.groups()
            month = ITALIAN_MONTHS.get(month_name)
            if month is not None:
                return datetime(int(year), month, int(day), tzinfo=UTC)
    except ValueError:
        return None
    return None


def _text(element: Tag | None) -> str:
    if element is None:
        return ""
    return " ".join(element.get_text(" ").split())


def _select(item: Tag, selector: str | None) -> Tag | None:
    return item.select_one(selector) if selector else None


def normalize_scraped_page(
    html: str | bytes,
    site: ScrapedSite,
    *,
    now: datetime | None = None,
) -> list[Article]:
    """Extract articles from a listing page.

    Items lacking a title or a link are dropped. Relative links resolve
    against the page URL. An unreadable date defaults to ``now``.
    """
    now = now or utcnow()
    soup = BeautifulSoup(html, "html.parser")

    articles: list[Article] = []
    for item in soup.select(site.item):
        title = _text(_select(item, site.title))
        link_el = _select(item, site.link) or item.find("a")
        href = link_el.get("href") if isinstance(link_el, Tag) else None
        if not title or not isinstance(href, str) or not href.strip():
            continue

        date_el = _select(item, site.date)
        date_attr = date_el.get("datetime") if date_el is not None else None
        published = parse_italian_date(_text(date_el)) or parse_italian_date(
            date_attr if isinstance(date_attr, str) else None
        )
        description = _text(_select(item, site.description))

        articles.append(
            Article(
                title=title[:TITLE_CHARS],
                url=urljoin(site.url, href.strip()),
                published_at=isoformat_utc(published or now),
                source=ArticleSource(
                    name=site.name,
                    platform=Platform.WEB,
                    country=site.country,
                    url=site.url,
                ),
                description=description[:DESCRIPTION_CHARS],
                content=description,
                author=site.name,
            )
        )
    return articles


class SiteScraperFetcher:
    """Scrape a set of listing pages in parallel and filter by query terms.

    A site that fails to download contributes no items. The fetch raises
    only when every site fails.

    Args:
        sites: Sites to scrape (defaults to ``DEFAULT_SITES``).
    """

    name = PROVIDER

    def __init__(self, sites: Sequence[ScrapedSite] = DEFAULT_SITES) -> None:
        self._sites = list(sites)

    async def _scrape(self, site: ScrapedSite) -> list[Article]:
        response = await http_get(PROVIDER, site.url, headers=HEADERS)
        articles = normalize_scraped_page(response.content, site)
        logger.info(f"Scraper: {len(articles)} items from {site.name}")
        return articles

    async def fetch(
        self,
        query: str,
        *,
        language: str = "en",
        limit: int | None = None,
    ) -> tuple[list[Article], Usage]:
        batches = await gather_partial(
            [self._scrape(site) for site in self._sites],
            [f"site {site.name}" for site in self._sites],
        )

        merged = sort_by_published(article for batch in batches for article in batch)
        articles = deduplicate_by_url(filter_by_terms(merged, query))
        if limit is not None:
            articles = articles[:limit]
        return (articles, Usage.for_requests(PROVIDER, len(self._sites)))
