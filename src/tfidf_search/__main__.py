"""Allow ``python -m tfidf_search``."""

from tfidf_search.cli import main


main()
