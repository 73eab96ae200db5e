# Quick reference commands (run from repo root). These are comments only; copy/paste as needed.

# Install the project with test dependencies
# python -m pip install -e ".[test]"

# Run the full test suite (tests/db/ is skipped unless DATABASE_URL points at a Postgres)
# python -m pytest

# Run focused test files
# python -m pytest tests/test_extractor.py tests/test_matcher.py
# python -m pytest tests/test_fetcher.py tests/test_orchestrator.py
# python -m pytest tests/test_scrape_endpoint.py tests/test_api_routes.py
# python -m dotenv run -- python -m pytest tests/db

# Start the API locally (with env vars loaded)
# python -m dotenv run -- python -m uvicorn app.api:app --reload

# Trigger a run over HTTP (add -H "Authorization: Bearer $SCRAPER_TRIGGER_TOKEN" when set)
# curl -X POST http://127.0.0.1:8000/api/scrape -H "content-type: application/json" -d '{"manual": true}'

# Run the scheduled worker (loops every CHECK_INTERVAL seconds)
# python -m dotenv run -- python main.py

# Single pass, prints the JSON summary
# python -m dotenv run -- python -m worker.main --once

# Preview what the extractor finds on a page (live URL or saved HTML)
# python -m scripts.preview_extract https://example.com/careers -k engineer -k analyst
# python -m scripts.preview_extract saved_page.html --source-url https://example.com/careers

# Inspect the database (example queries)
# python -m scripts.db_shell "SELECT id,email,created_at FROM users"
# python -m scripts.db_shell "SELECT company_id,title,url,scraped_at FROM jobs ORDER BY id DESC LIMIT 5"
# python -m scripts.db_shell "SELECT * FROM notifications WHERE email_sent = FALSE"
