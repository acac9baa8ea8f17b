"""Common literal values used across headless_frontend.

These constants keep CMS-specific keys and pagination defaults centralized so
the resolver, mappers, and tests can import the same values without drifting.
Intended for internal use within the headless_frontend package.

Examples
--------
>>> from headless_frontend import _constants
>>> _constants.WORDPRESS_COMPONENT_KEY
'acf_fc_layout'
>>> "og:title" in _constants.ALLOWED_META
True
"""

DEFAULT_RESULTS_PER_PAGE = 20
DEFAULT_PAGE_LINKS = 5

DEFAULT_COMPONENT_KEY = "component"
WORDPRESS_COMPONENT_KEY = "acf_fc_layout"
CRAFTCMS_COMPONENT_KEY = "typeHandle"

WORDPRESS_TOTAL_HEADER = "X-WP-Total"
WORDPRESS_MAX_PER_PAGE = 100

ALLOWED_META = (
    "description",
    "keywords",
    "robots",
    "og:title",
    "og:image",
    "og:description",
    "twitter:card",
    "twitter:title",
    "twitter:description",
    "twitter:image",
)
