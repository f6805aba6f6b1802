"""LinkedIn job-view DOM selector constants with fallbacks.

Public (guest) layout first, then the signed-in unified top card.
Each constant is a tuple so callers iterate until a match is found.
"""

# --- Job title (also the readiness signal for the page) ---
TITLE_SELECTORS: tuple[str, ...] = (
    ".top-card-layout__title",
    ".job-details-jobs-unified-top-card__job-title",
)

# --- Company name ---
COMPANY_SELECTORS: tuple[str, ...] = (
    ".top-card-layout__first-subline",
    ".job-details-jobs-unified-top-card__company-name",
)

# --- Location ---
LOCATION_SELECTORS: tuple[str, ...] = (
    ".top-card-layout__second-subline",
    ".job-details-jobs-unified-top-card__bullet",
)

# --- Full description body ---
DESCRIPTION_SELECTORS: tuple[str, ...] = (
    ".show-more-less-html__markup",
    ".jobs-description__content",
)

# --- Posted time ---
POSTED_DATE_SELECTORS: tuple[str, ...] = (
    ".posted-time-ago__text",
    ".job-details-jobs-unified-top-card__posted-date",
)

JOB_URL_MARKER = "linkedin.com/jobs"
