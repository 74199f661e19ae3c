APP_NAME = "ExpenseIQ"
APP_WIDTH = 1100
APP_HEIGHT = 720
DB_FILE = "expenseiq.db"
STORAGE_KEY = "expenseiq_expenses"

DATE_FORMAT = "%Y-%m-%d"

EXPORT_FORMAT_VERSION = "1.0"
SUPPORTED_FORMAT_MAJOR = 1

HIGH_SPENDING_THRESHOLD = 1000
SAVING_OPPORTUNITY_THRESHOLD = 500
MAX_SAVING_TIPS = 2
MAX_INSIGHTS = 5
PROJECTION_MIN_DAY = 7
RECENT_DAYS = 7
TREND_DAYS = 7
SUGGESTION_MIN_LENGTH = 3

# Fixed enumeration order. Every tie-break in scoring and top-category
# selection iterates this tuple.
CATEGORY_ORDER = (
    "food",
    "transport",
    "shopping",
    "entertainment",
    "bills",
    "health",
    "education",
    "travel",
    "other",
)
DEFAULT_CATEGORY = "other"

CATEGORY_KEYWORDS = {
    "food": [
        "restaurant", "food", "lunch", "dinner", "breakfast", "cafe", "coffee",
        "pizza", "burger", "sandwich", "groceries", "supermarket", "starbucks",
        "mcdonalds", "kfc", "subway", "dominos", "meal", "snack", "drink",
        "market", "deli", "bakery", "kitchen", "dining", "eat", "hungry",
        "taco", "sushi", "chinese", "italian", "mexican", "thai", "indian",
    ],
    "transport": [
        "gas", "fuel", "uber", "lyft", "taxi", "bus", "train", "subway",
        "parking", "toll", "car", "bike", "flight", "airline", "airport",
        "metro", "transportation", "commute", "travel", "vehicle", "auto",
        "garage", "mechanic", "oil change", "tire", "repair",
    ],
    "shopping": [
        "amazon", "shop", "store", "mall", "purchase", "buy", "clothes",
        "clothing", "shoes", "electronics", "gadget", "phone", "laptop",
        "computer", "target", "walmart", "costco", "online", "delivery",
        "order", "fashion", "accessories", "jewelry", "watch", "bag",
    ],
    "entertainment": [
        "movie", "cinema", "theater", "netflix", "spotify", "game", "gaming",
        "concert", "show", "ticket", "event", "party", "bar", "pub",
        "club", "entertainment", "fun", "hobby", "book", "magazine",
        "subscription", "youtube", "streaming", "music", "video",
    ],
    "bills": [
        "electric", "electricity", "water", "gas", "internet", "phone",
        "mobile", "bill", "utility", "rent", "mortgage", "insurance",
        "cable", "wifi", "heating", "cooling", "power", "energy",
        "subscription", "service", "monthly", "payment", "due",
    ],
    "health": [
        "doctor", "hospital", "pharmacy", "medicine", "medical", "health",
        "dental", "dentist", "checkup", "appointment", "prescription",
        "clinic", "therapy", "treatment", "surgery", "medication",
        "vitamins", "supplements", "fitness", "gym", "wellness",
    ],
    "education": [
        "school", "college", "university", "tuition", "books", "course",
        "class", "education", "learning", "student", "study", "training",
        "workshop", "seminar", "certification", "exam", "fee", "academic",
    ],
    "travel": [
        "hotel", "flight", "vacation", "trip", "travel", "booking",
        "airbnb", "resort", "cruise", "tour", "sightseeing", "luggage",
        "passport", "visa", "tourism", "adventure", "holiday", "journey",
    ],
    "other": [],
}

CATEGORY_ICONS = {
    "food":          "🍔",
    "transport":     "🚗",
    "shopping":      "🛍️",
    "entertainment": "🎬",
    "bills":         "💡",
    "health":        "🏥",
    "education":     "📚",
    "travel":        "✈️",
    "other":         "📦",
}

CATEGORY_NAMES = {
    "food":          "Food & Dining",
    "transport":     "Transportation",
    "shopping":      "Shopping",
    "entertainment": "Entertainment",
    "bills":         "Bills & Utilities",
    "health":        "Healthcare",
    "education":     "Education",
    "travel":        "Travel",
    "other":         "Other",
}

CATEGORY_COLORS = {
    "food":          "#FF6384",
    "transport":     "#36A2EB",
    "shopping":      "#FFCE56",
    "entertainment": "#4BC0C0",
    "bills":         "#9966FF",
    "health":        "#FF9F40",
    "education":     "#FF6384",
    "travel":        "#C9CBCF",
    "other":         "#4BC0C0",
}

# Sunday-first, matching how weekday statistics are reported.
WEEKDAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

SEVERITY_COLORS = {
    "error":   "#F44336",
    "warning": "#FF9800",
    "info":    "#2196F3",
    "success": "#4CAF50",
}

TREND_LINE_COLOR = "#667eea"
