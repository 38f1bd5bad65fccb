from datetime import date, timedelta
from typing import List, Optional

from app.models import TechEvent

# (id, title, days from today, location, organizer, type, description, registration link)
_EVENT_TEMPLATES = [
    ("1", "Google Developer Group DevFest 2025", 5, "Tech Hub Convention Center", "Google Developer Group",
     "Conference", "Join us for the biggest developer festival of the year with talks on AI, Cloud, and Mobile development.",
     "https://gdg.dev/devfest"),
    ("2", "AI/ML Workshop Series", 12, "Innovation Campus", "Microsoft Learn Student Ambassadors",
     "Workshop", "Hands-on workshop covering machine learning fundamentals and practical AI applications.",
     "https://aka.ms/mlsa-workshop"),
    ("3", "Startup Pitch Competition", 18, "University Entrepreneurship Center", "Local E-Cell",
     "Competition", "Present your startup ideas to industry experts and compete for funding opportunities.",
     "https://startup-pitch.com/register"),
    ("4", "React Native Meetup", 8, "WeWork Downtown", "React Native Community",
     "Meetup", "Monthly meetup for React Native developers to share experiences and learn new techniques.",
     "https://meetup.com/react-native"),
    ("5", "Blockchain & Web3 Summit", 25, "Crypto Convention Hall", "Web3 Developers Alliance",
     "Summit", "Explore the future of decentralized applications and blockchain technology.",
     "https://web3summit.dev"),
    ("6", "Women in Tech Networking", 15, "Tech Diversity Center", "Women Who Code",
     "Networking", "Connect with fellow women in technology and share career experiences.",
     "https://womenwhocode.com/networking"),
    ("7", "DevOps & Cloud Infrastructure Meetup", 22, "Cloud Computing Center", "DevOps Community",
     "Meetup", "Learn about the latest trends in DevOps, containerization, and cloud infrastructure.",
     "https://devops-meetup.com"),
    ("8", "Cybersecurity Awareness Workshop", 30, "Security Training Institute", "CyberSec Alliance",
     "Workshop", "Essential cybersecurity practices for developers and IT professionals.",
     "https://cybersec-workshop.com"),
    ("9", "UI/UX Design Thinking Session", 10, "Design Studio Hub", "UX Designers Guild",
     "Workshop", "Interactive session on design thinking methodologies and user experience best practices.",
     "https://ux-design-session.com"),
    ("10", "Open Source Contribution Hackathon", 35, "Innovation Lab", "Open Source Community",
     "Hackathon", "48-hour hackathon focused on contributing to popular open source projects.",
     "https://opensource-hack.com"),
]


def generate_upcoming_events(city: str, today: Optional[date] = None) -> List[TechEvent]:
    today = today or date.today()
    return [
        TechEvent(
            id=event_id,
            title=title,
            date=(today + timedelta(days=offset)).isoformat(),
            location=location,
            city=city,
            organizer=organizer,
            type=event_type,
            description=description,
            registration_link=link,
        )
        for event_id, title, offset, location, organizer, event_type, description, link in _EVENT_TEMPLATES
    ]


def days_until_event(event_date: str, today: Optional[date] = None) -> int:
    today = today or date.today()
    return (date.fromisoformat(event_date) - today).days


def format_event_date(event_date: str, today: Optional[date] = None) -> str:
    """'Today', 'Tomorrow', or e.g. 'Wednesday, October 21, 2026'."""
    days = days_until_event(event_date, today)
    if days == 0:
        return "Today"
    if days == 1:
        return "Tomorrow"
    d = date.fromisoformat(event_date)
    return f"{d.strftime('%A')}, {d.strftime('%B')} {d.day}, {d.year}"


def list_events(city: str, today: Optional[date] = None) -> List[TechEvent]:
    today = today or date.today()
    return [
        event.model_copy(
            update={
                "days_until": days_until_event(event.date, today),
                "display_date": format_event_date(event.date, today),
            }
        )
        for event in generate_upcoming_events(city, today)
    ]
