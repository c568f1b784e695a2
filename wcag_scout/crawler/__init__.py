"""wcag_scout.crawler: URL handling, deduplication, scheduling and the crawl itself."""
