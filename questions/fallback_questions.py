# Served when the configured catalog is missing or unreadable, so the quiz still renders.
FALLBACK_QUESTIONS = [
    {
        "id": "goal",
        "title": "What's your primary goal?",
        "type": "single",
        "options": ["Energy", "Immunity", "Skin & Hair", "Sleep"],
        "required": True
    }
]
