"""
Entry point to run the background scrape worker.
"""
from worker.main import cli


if __name__ == "__main__":
    cli()
