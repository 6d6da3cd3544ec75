"""Precache manifest - changing it requires a CACHE_VERSION bump."""

CACHE_FILES = (
    "/",
    "/index.html",
    "/img/logo/icon-192x192.png",
    "/img/logo/icon-512x512.png",
    "/img/flyers/a.jpg",
    "/img/flyers/b.jpg",
    "/favicon.ico",
    "/manifest.json",
    "/pub",
    "/mis-directory",
    "/mis/clubs/directory",
    "/mis/recycling-efficiency",
    "/sign-in",
    "/sign-up",
    "/forgot-password",
    "/reset-password",
    "/auth/mis/directory",
    "/auth/mis/clubs/directory",
    "/auth/EPAOperations/AllInspections",
    "/auth/EPAOperations/ReportViolation",
    "/auth/EPAOperation/Dashboard",
    "/auth/mis/recycling-efficiency",
    "/home",
    "/home-license",
    "/home-super",
    "/home-deo",
    "/home-admin",
    "/home-do",
    "/track-application",
    "/error",
    "/single-menu-view",
    "/collapse-menu-item-view-1",
    "/collapse-menu-item-view-2",
    "/collapse-menu-item-view-3",
    "/group-single-menu-item-view",
    "/group-collapse-menu-item-view-1",
    "/group-collapse-menu-item-view-2",
    "/analytics1",
    "/spuid-signup",
    "/spuid-review",
    "/robots.txt",
    "/sitemap.xml",
)

# Served stale-while-revalidate
STATIC_EXTENSIONS = (
    ".js",
    ".css",
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".svg",
    ".webp",
    ".woff2",
    ".woff",
    ".ttf",
)
