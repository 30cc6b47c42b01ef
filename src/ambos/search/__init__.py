"""Source adapters that fetch and normalize articles."""

from ambos.search.base import ArticleFetcher
from ambos.search.bluesky import BlueskyFetcher, normalize_bluesky
from ambos.search.gnews import GNewsFetcher, normalize_gnews
from ambos.search.gopher import GopherFetcher, normalize_gopher
from ambos.search.mastodon import MastodonFetcher, normalize_mastodon
from ambos.search.mediastack import MediastackFetcher, normalize_mediastack
from ambos.search.merge import (
    deduplicate_by_url,
    filter_by_terms,
    merge_articles,
    sort_by_published,
)
from ambos.search.newsapi import NewsApiFetcher, normalize_newsapi
from ambos.search.rss import DEFAULT_FEEDS, RssFeed, RssFetcher, normalize_rss
from ambos.search.scraper import (
    DEFAULT_SITES,
    ScrapedSite,
    SiteScraperFetcher,
    normalize_scraped_page,
    parse_italian_date,
)

__all__ = [
    "DEFAULT_FEEDS",
    "DEFAULT_SITES",
    "ArticleFetcher",
    "BlueskyFetcher",
    "GNewsFetcher",
    "GopherFetcher",
    "MastodonFetcher",
    "MediastackFetcher",
    "NewsApiFetcher",
    "RssFeed",
    "RssFetcher",
    "ScrapedSite",
    "SiteScraperFetcher",
    "deduplicate_by_url",
    "filter_by_terms",
    "merge_articles",
    "normalize_bluesky",
    "normalize_gnews",
    "normalize_gopher",
    "normalize_mastodon",
    "normalize_mediastack",
    "normalize_newsapi",
    "normalize_rss",
    "normalize_scraped_page",
    "parse_italian_date",
    "sort_by_published",
]
