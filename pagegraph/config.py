"""
Constants shared by the page graph loader.
"""

from typing import Set

# Virtual file kinds
PAGE_KIND: str = "page"
META_KIND: str = "meta"
FILE_KINDS: Set[str] = {PAGE_KIND, META_KIND}

# Graph node tags
PAGE_NODE: str = "page"
META_NODE: str = "meta"
FOLDER_NODE: str = "folder"

# Key of the logical root directory in dirname space
ROOT_KEY: str = ""

# Keys written into ResultContext.data by the built-in transformers
PAGES_BY_PATH_KEY: str = "pages_by_path"
STATS_KEY: str = "stats"
