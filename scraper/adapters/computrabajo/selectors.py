"""
All CSS selectors, label patterns and phrase lists used by the Computrabajo adapter.
Centralized here so that template changes only need to happen in one place.
"""

import re

# --- Listing Page Selectors ---

# Detail links (several patterns to catch template variants)
DETAIL_LINK_SELECTORS = [
    'a[href*="/oferta-"]',
    'a[href*="/ofertas-"]',
    'a[href*="/vacante-"]',
    'a[href*="/job/"]',
    "a.js-o-link",
    'a[href*="/empleo/"]',
    'a[href*="/trabajo-"]',
]

PAGINATION_SELECTORS = [
    'a[href*="page="]',
    ".pagination a",
    "a.next",
    'a[rel="next"]',
]

# --- Structured Data ---

JSON_LD_SELECTOR = 'script[type="application/ld+json"]'
JOB_POSTING_TYPE = "JobPosting"

# --- Job Detail Page Selectors ---

# Title (tried in order)
TITLE_TEMPLATE_SELECTOR = ".title_offer.fs21.fwB.lh1_2"
TITLE_GENERIC_SELECTOR = 'h1, .box_title h1, [class*="title"]'

# Company (tried in order)
COMPANY_TEMPLATE_SELECTOR = "a.dIB.mr10"
COMPANY_MICRODATA_SELECTORS = [
    '[itemprop="hiringOrganization"] [itemprop="name"]',
    '[itemscope][itemtype*="Organization"] [itemprop="name"]',
]
COMPANY_PROFILE_SELECTORS = [
    'a[href*="/empresas/"]',
    'a[href*="/empresa/"]',
    '.box_header a[href*="/empresa"]',
    'a:-soup-contains("Ver más sobre la empresa")',
    'a:-soup-contains("Ver más sobre la compañía")',
]
COMPANY_HEADER_SELECTOR = ".box_header .fc_base, .box_header .fc_base a, .box_header .fc_base span"
COMPANY_GENERIC_SELECTOR = '.box_header a, .box_company a, [class*="company"] a'

# Location (tried in order)
LOCATION_MICRODATA_SELECTORS = [
    '[itemprop="jobLocation"] [itemprop="addressLocality"]',
    '[itemprop="jobLocation"] [itemprop="addressRegion"]',
    '[itemprop="jobLocation"] [itemprop="addressCountry"]',
]
LOCATION_TEMPLATE_SELECTOR = ".fs16.mb5"
LOCATION_GENERIC_SELECTOR = '.box_header p, [class*="location"], nav.breadcrumb'

# Date posted
DATE_TEMPLATE_SELECTOR = ".fc_aux.fs13.mtB"

# Employment type
EMPLOYMENT_TEMPLATE_SELECTOR = ".dFlex.mb10"

# Description (tried in order)
DESCRIPTION_TEMPLATE_SELECTOR = ".fs16.t_word_wrap"
DESCRIPTION_SELECTORS = [
    '[itemprop="description"]',
    '.box_detail [itemprop="description"]',
    ".box_detail .box_section",
    ".box_detail article",
    "#offer-body",
    ".oferta-detalle, .descripcion-oferta",
    ".descripcion, .description, #description",
    ".job_desc",
]
DESCRIPTION_GENERIC_SELECTOR = ".box_detail, .oferta, main"

# Chips / attribute lists holding "Label: value" pairs
LABELED_CHIP_SELECTOR = "li, .box_attributes li, .attribute, .chip, .tag"

# --- Label Patterns ---

LOCATION_LABELS = [
    re.compile(r"ubicaci[oó]n", re.IGNORECASE),
    re.compile(r"ciudad", re.IGNORECASE),
    re.compile(r"estado", re.IGNORECASE),
    re.compile(r"localidad", re.IGNORECASE),
]
SALARY_LABELS = [
    re.compile(r"salario", re.IGNORECASE),
    re.compile(r"sueldo", re.IGNORECASE),
    re.compile(r"compensaci[oó]n", re.IGNORECASE),
]
CONTRACT_LABELS = [
    re.compile(r"tipo de contrato", re.IGNORECASE),
    re.compile(r"contrato", re.IGNORECASE),
]
SCHEDULE_LABELS = [
    re.compile(r"jornada", re.IGNORECASE),
    re.compile(r"horario", re.IGNORECASE),
    re.compile(r"modalidad", re.IGNORECASE),
]
DATE_LABELS = [
    re.compile(r"publicado", re.IGNORECASE),
    re.compile(r"fecha de publicaci[oó]n", re.IGNORECASE),
]

# --- Sanitizer ---

# Non-content elements removed outright
STRIP_SELECTORS = [
    "script, style, noscript, iframe, form, button, svg, input, textarea, select",
    "[data-complaint-overlay], #complaint-popup-container, .popup, .hide",
    "[data-offers-grid-detail-container-error]",
    '[aria-hidden="true"], [hidden]',
]
HIDDEN_STYLE_PATTERN = re.compile(r"display\s*:\s*none", re.IGNORECASE)

ALLOWED_TAGS = ["p", "br", "ul", "ol", "li", "strong", "em", "b", "i", "a", "h3", "h4"]
# Tags whose presence marks a fragment as prose rather than stylesheet text
CONTENT_TAG_PATTERN = re.compile(r"<(p|ul|li|a|strong|em|br|h3|h4)\b", re.IGNORECASE)
BRACE_BLOCK_PATTERN = re.compile(r"\{.*\}", re.DOTALL)

# --- Company Cleanup ---

COMPANY_STOP_TOKENS = [
    "seguir",
    "volver",
    "información básica",
    "política de privacidad",
    "responsable",
    "finalidad",
    "legitimación",
    "destinatarios",
    "derechos",
    "¡no te pierdas",
    "recibe notificaciones",
    "formato incorrecto",
    "contraseña incorrecta",
    "acepto las condiciones",
    "ver detalle legal",
]

# --- Location Cleanup ---

LOCATION_TAIL_PATTERNS = [
    re.compile(r"Publicado.*$", re.IGNORECASE | re.DOTALL),
    re.compile(r"Postular.*", re.IGNORECASE | re.DOTALL),
    re.compile(r"Ver detalle legal.*", re.IGNORECASE | re.DOTALL),
]

# --- CAPTCHA / Bot Detection ---

CAPTCHA_SELECTORS = [
    'iframe[src*="hcaptcha"]',
    'iframe[src*="recaptcha"]',
    'iframe[src*="turnstile"]',
    'div[class*="captcha"]',
    'div[id*="captcha"]',
    ".g-recaptcha",
    ".cf-turnstile",
]

# Sign-in wall phrasing (Spanish first, English as served by the CDN)
LOGIN_PHRASES = [
    "iniciar sesión",
    "inicia sesión",
    "ingresa a tu cuenta",
    "crear cuenta",
    "crea tu cuenta",
    "regístrate",
    "sign in",
    "log in",
    "login",
    "create account",
]

# Block-page phrasing, only trusted when no job content is present
BLOCKING_PHRASES = [
    "acceso denegado",
    "verifica que eres humano",
    "verificando que eres humano",
    "comprobando tu navegador",
    "access denied",
    "security check",
    "verify you're human",
    "verify you are human",
    "checking your browser",
]


def _phrase_pattern(phrases):
    return re.compile(r"\b(?:" + "|".join(map(re.escape, phrases)) + r")\b", re.IGNORECASE)


# Whole-word matches only: "log in" must not fire inside "blog institucional"
LOGIN_PATTERN = _phrase_pattern(LOGIN_PHRASES)
BLOCKING_PATTERN = _phrase_pattern(BLOCKING_PHRASES)
INTERSTITIAL_PATTERN = _phrase_pattern(LOGIN_PHRASES + BLOCKING_PHRASES)

PASSWORD_INPUT_SELECTOR = 'input[type="password"]'
LOGIN_FORM_ACTION_PATTERN = re.compile(r"login|signin|sign-in|acceso|ingresar", re.IGNORECASE)
