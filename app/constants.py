DEFAULT_TECHNOLOGY = "web-dev"

TECHNOLOGY_NAMES = {
    "web-dev": "Web Development",
    "mobile-dev": "Mobile Development",
    "ai-ml": "AI/Machine Learning",
    "data-science": "Data Science",
    "devops": "DevOps",
    "ui-ux": "UI/UX Design",
    "blockchain": "Blockchain/Web3",
}

ROADMAP_LEVELS = ("Beginner", "Intermediate", "Advanced")

PROGRESS_KEY_PREFIX = "roadmap-progress-"

# Messages attached to fallback roadmap responses
FALLBACK_BUSY_MESSAGE = "AI service is currently busy. Here's a comprehensive roadmap based on industry standards."
FALLBACK_QUOTA_MESSAGE = "API quota exceeded. Here's a comprehensive roadmap based on industry standards."
FALLBACK_GENERIC_MESSAGE = "Unable to generate AI roadmap. Here's a comprehensive roadmap based on industry standards."

INVALID_API_KEY_MESSAGE = "Invalid API key configuration"
QUOTA_EXCEEDED_MESSAGE = "API quota exceeded. Please try again later."
GEMINI_NOT_CONFIGURED_MESSAGE = "Gemini API key not configured"
