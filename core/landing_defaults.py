"""Default landing page copy used for seeding and as a fallback when no row is active."""

HERO = {
    "heading": "Join Our Creative Team!",
    "subheading": (
        "We are looking for the next superhero to join our league of "
        "extraordinary creators."
    ),
    "cta_label": "Start Your Audition",
}

ABOUT = {
    "eyebrow": "THE CULTURE CHECK",
    "title": "Founded at 19.",
    "highlight": "Built by a Brotherhood.",
    "body": (
        "<p><strong>Cade Schultz</strong> didn't start The CanMan in a boardroom. "
        "He started it at 19 years old in Rockwall, Texas, with a simple obsession: "
        "<em>leave everyone smiling.</em></p>"
        "<p>We aren't a boring corporate machine. We are a tribe of problem solvers who "
        "believe in <strong>Ridiculous Hospitality</strong>. We work hard, we treat people "
        "right, and we have each other's backs.</p>"
        "<p>If you want a badge number, go elsewhere. If you want a brotherhood, welcome home.</p>"
    ),
    "image_caption": "Cade & The Team",
}

PORTFOLIO_STATS = [
    {"title": "50,000+", "subtitle": "Happy Customers", "accent": "blue", "order": 1},
    {"title": "Zero", "subtitle": "Micromanagement", "accent": "green", "order": 2},
    {"title": "100%", "subtitle": "Autonomy", "accent": "yellow", "order": 3},
]

CONTACT = {
    "strip_label": "HIRING HEROES IN TEXAS",
    "phone_number": "+1 (555) 123-4567",
    "brand_name": "HERO HQ",
    "tagline": "Ridiculous Hospitality for the Digital Age.",
    "location": "Dallas, Texas",
    "email_address": "hello@hero-hq.com",
    "copyright_holder": "The CanMan",
}
