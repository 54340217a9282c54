"""Link a note to the notes that mention it, under the closest heading."""

from .indexer import find_token_lines, index_headings
from .resolver import closest_heading, resolve_mentions_for_file

__version__ = "0.1.0"
