"""
Computrabajo-specific constants and configuration.
"""

import re

# Base URLs
BASE_URL = "https://www.computrabajo.com.mx"
SOURCE = "computrabajo.com"

# Detail pages are recognised by URL shape alone
DETAIL_URL_PATTERN = re.compile(r"/oferta-|/job/|/empleo/|/vacante/", re.IGNORECASE)

# Query parameters dropped before a URL is enqueued
TRACKING_PARAMS = ["utm_source", "utm_medium", "utm_campaign", "gclid", "fbclid"]

# Content heuristics
MIN_DESCRIPTION_CHARS = 40
MIN_BROAD_DESCRIPTION_CHARS = 20
MIN_TITLE_CHARS = 2
MAX_TITLE_CHARS = 200
MAX_LOCATION_CHARS = 120
MAX_COMPANY_CHARS = 80
# Descriptions shorter than this are checked for interstitial phrasing
SHORT_DESCRIPTION_CHARS = 300
# Chips longer than this are containers, not label/value pairs
MAX_LABELED_CHIP_CHARS = 160
