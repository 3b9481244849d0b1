"""Cursor-driven photo page scraper.

Reads the page cursor from a coordination service, fetches that page from
the photo API, forwards the raw body back and asks the service to advance
the cursor. Pacing between cycles grows on failure and resets on success.

Key modules:
    models      -- ScraperConfig, CycleOutcome, RunSummary dataclasses
    errors      -- ScraperError hierarchy raised by the clients
    proxies     -- proxy list parsing and round-robin selection
    pacing      -- PacingPolicy for the inter-cycle interval
    coordination-- CoordinationClient for cursor and payload endpoints
    photo_api   -- PhotoApiClient for authenticated, optionally proxied fetches
    cycle       -- CycleController for a single fetch/submit/advance cycle
    runner      -- run() loop driving a fixed number of cycles
    cli         -- argparse entry point
"""
