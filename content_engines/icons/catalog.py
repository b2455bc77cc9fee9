"""Icon catalog: the closed set of Lucide icon names cards may reference."""
from __future__ import annotations

from typing import FrozenSet, List

ICON_CATALOG: FrozenSet[str] = frozenset(
    {
        # metrics / achievement
        "Award", "Trophy", "Medal", "Star", "Target", "TrendingUp", "TrendingDown",
        "BarChart", "BarChart2", "BarChart3", "LineChart", "PieChart", "Activity",
        "Gauge", "Percent", "Hash", "Calculator", "Crown", "Gem", "ThumbsUp",
        # people
        "User", "Users", "UserCheck", "UserPlus", "Users2", "Contact", "Handshake",
        "HeartHandshake", "Heart", "Smile", "Baby", "GraduationCap",
        # construction / engineering
        "Building", "Building2", "Factory", "Warehouse", "Home", "Hammer", "Wrench",
        "HardHat", "Construction", "Ruler", "PenTool", "Drill", "Pickaxe", "Shovel",
        "Layers", "Layout", "Grid3X3", "Box", "Boxes", "Package", "Truck", "Forklift",
        "Cog", "Settings", "Settings2", "Cpu", "Zap", "Plug", "Lightbulb", "Sun",
        "Droplet", "Droplets", "Flame", "Wind", "Leaf", "Trees", "TreePine", "Mountain",
        "Recycle", "Globe", "Globe2", "Map", "MapPin", "Compass", "Navigation",
        "Route", "Milestone", "Landmark", "Store",
        # policy / safety / quality
        "Shield", "ShieldCheck", "ShieldAlert", "Lock", "LockKeyhole", "Key",
        "Scale", "Gavel", "FileCheck", "FileText", "ClipboardCheck", "ClipboardList",
        "BadgeCheck", "CheckCircle", "CheckCircle2", "CheckSquare", "AlertTriangle",
        "AlertCircle", "Info", "Eye", "Search", "Fingerprint", "Stethoscope",
        "HeartPulse", "LifeBuoy", "Siren",
        # business / services
        "Briefcase", "FolderOpen", "Folder", "Archive", "Calendar", "CalendarCheck",
        "Clock", "Timer", "Hourglass", "DollarSign", "Wallet", "CreditCard",
        "Receipt", "ShoppingCart", "Rocket", "Flag", "Bookmark", "BookOpen", "Book",
        "Newspaper", "Megaphone", "Presentation", "Monitor", "Laptop", "Smartphone",
        "Server", "Database", "Cloud", "Wifi", "Network", "Link", "Share2",
        # communication
        "Mail", "Phone", "MessageCircle", "MessageSquare", "Send", "Bell",
        # misc ui
        "Sparkles", "Puzzle", "Infinity", "RefreshCw", "Repeat", "Workflow",
        "GitBranch", "Camera", "Image", "Video", "Music", "Palette", "Brush",
    }
)


def is_valid_icon(name: object) -> bool:
    return isinstance(name, str) and name in ICON_CATALOG


def list_icons() -> List[str]:
    return sorted(ICON_CATALOG)


def search_icons(term: str, limit: int = 50) -> List[str]:
    """Catalog names containing ``term`` (case-insensitive), alphabetical."""
    needle = (term or "").strip().lower()
    matches = [name for name in sorted(ICON_CATALOG) if needle in name.lower()]
    return matches[: max(limit, 0)]
