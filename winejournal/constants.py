"""Reference data shared by the API: tasting vocabularies, regions, pairings."""

# Structured tasting note vocabularies (value, label)
CLARITY_OPTIONS = [
    ("clear", "Clear"),
    ("hazy", "Hazy (faulty?)"),
]

APPEARANCE_INTENSITY_OPTIONS = [
    ("pale", "Pale"),
    ("medium", "Medium"),
    ("deep", "Deep"),
]

COLOUR_OPTIONS = [
    ("lemon", "Lemon"),
    ("gold", "Gold"),
    ("amber", "Amber"),
    ("brown", "Brown"),
    ("pink", "Pink"),
    ("salmon", "Salmon"),
    ("orange", "Orange"),
    ("purple", "Purple"),
    ("ruby", "Ruby"),
    ("garnet", "Garnet"),
    ("tawny", "Tawny"),
]

NOSE_CONDITION_OPTIONS = [
    ("clean", "Clean"),
    ("unclean", "Unclean"),
]

NOSE_INTENSITY_OPTIONS = [
    ("light", "Light"),
    ("medium", "Medium"),
    ("pronounced", "Pronounced"),
]

PRIMARY_AROMA_OPTIONS = {
    "floral": ["Rose", "Violet", "Lavender", "Orange Blossom", "Elderflower"],
    "green_fruit": ["Apple", "Pear", "Gooseberry", "Grape"],
    "citrus_fruit": ["Lemon", "Lime", "Orange", "Grapefruit"],
    "stone_fruit": ["Peach", "Apricot", "Nectarine"],
    "tropical_fruit": ["Banana", "Lychee", "Mango", "Passion Fruit"],
    "red_fruit": ["Red Cherry", "Red Plum", "Strawberry", "Raspberry"],
    "black_fruit": ["Black Cherry", "Black Plum", "Blackberry", "Blueberry"],
    "herbaceous": ["Grass", "Bell Pepper", "Asparagus"],
    "herbal": ["Mint", "Eucalyptus", "Fennel", "Dill"],
    "spice": ["Black Pepper", "Liquorice", "Cinnamon", "Clove"],
    "fruit_ripeness": ["Unripe", "Ripe", "Overripe"],
    "other": ["Wet Stone", "Mineral", "Petrol", "Kerosene"],
}

SECONDARY_AROMA_OPTIONS = {
    "yeast": ["Bread", "Biscuit", "Toast"],
    "malolactic": ["Butter", "Cream", "Cheese"],
    "oak": ["Vanilla", "Coconut", "Smoke", "Cedar", "Tobacco"],
}

TERTIARY_AROMA_OPTIONS = {
    "red_wine": ["Leather", "Earth", "Mushroom", "Game"],
    "white_wine": ["Honey", "Petrol", "Kerosene", "Wax"],
    "oxidised": ["Almond", "Hazelnut", "Walnut", "Coffee", "Caramel"],
}

_LOW_MEDIUM_HIGH = [("low", "Low"), ("medium", "Medium"), ("high", "High")]

PALATE_OPTIONS = {
    "sweetness": [
        ("bone-dry", "Bone Dry"),
        ("dry", "Dry"),
        ("off-dry", "Off-Dry"),
        ("medium-sweet", "Medium Sweet"),
        ("sweet", "Sweet"),
        ("very-sweet", "Very Sweet"),
    ],
    "acidity": _LOW_MEDIUM_HIGH,
    "tannin": _LOW_MEDIUM_HIGH,
    "alcohol": _LOW_MEDIUM_HIGH,
    "body": [("light", "Light"), ("medium", "Medium"), ("full", "Full")],
    "flavour_intensity": [("light", "Light"), ("medium", "Medium"), ("pronounced", "Pronounced")],
    "finish": [("short", "Short"), ("medium", "Medium"), ("long", "Long")],
}

QUALITY_OPTIONS = [
    ("faulty", "Faulty"),
    ("poor", "Poor"),
    ("acceptable", "Acceptable"),
    ("good", "Good"),
    ("very-good", "Very Good"),
    ("outstanding", "Outstanding"),
]

POPULAR_REGIONS = [
    "Bordeaux, France",
    "Burgundy, France",
    "Champagne, France",
    "Tuscany, Italy",
    "Piedmont, Italy",
    "Rioja, Spain",
    "Napa Valley, USA",
    "Sonoma County, USA",
    "Barossa Valley, Australia",
    "Marlborough, New Zealand",
    "Mosel, Germany",
    "Douro Valley, Portugal",
    "Stellenbosch, South Africa",
    "Franschhoek, South Africa",
    "Paarl, South Africa",
    "Constantia, South Africa",
    "Swartland, South Africa",
    "Elgin, South Africa",
]

POPULAR_GRAPES = [
    "Cabernet Sauvignon",
    "Merlot",
    "Pinot Noir",
    "Syrah/Shiraz",
    "Chardonnay",
    "Sauvignon Blanc",
    "Riesling",
    "Pinot Grigio",
    "Malbec",
    "Nebbiolo",
    "Sangiovese",
    "Tempranillo",
]

SOUTH_AFRICA_REGIONS = [
    {
        "name": "Stellenbosch",
        "description": "The heart of South African wine country, known for Cabernet Sauvignon and Bordeaux-style blends",
        "climate": "Mediterranean",
        "soil": "Granite and shale",
        "specialties": ["Cabernet Sauvignon", "Merlot", "Pinotage", "Chenin Blanc"],
        "best_time": "March to May (Harvest season)",
    },
    {
        "name": "Franschhoek",
        "description": "The French Corner, famous for its French Huguenot heritage and exceptional white wines",
        "climate": "Mediterranean with cool mountain influence",
        "soil": "Granite and sandstone",
        "specialties": ["Chardonnay", "Sauvignon Blanc", "Semillon", "Pinot Noir"],
        "best_time": "February to April (Harvest season)",
    },
    {
        "name": "Paarl",
        "description": "The Pearl of the Cape, known for its rich history and diverse wine styles",
        "climate": "Mediterranean with warm summers",
        "soil": "Granite and clay",
        "specialties": ["Shiraz", "Pinotage", "Chenin Blanc", "Cabernet Sauvignon"],
        "best_time": "March to May (Harvest season)",
    },
    {
        "name": "Constantia",
        "description": "The oldest wine region in South Africa, famous for its sweet wines and cool climate",
        "climate": "Cool maritime",
        "soil": "Granite and sandstone",
        "specialties": ["Sauvignon Blanc", "Semillon", "Muscat", "Pinot Noir"],
        "best_time": "February to April (Harvest season)",
    },
    {
        "name": "Elgin",
        "description": "A cool climate region known for its crisp white wines and elegant reds",
        "climate": "Cool maritime with high altitude",
        "soil": "Sandstone and shale",
        "specialties": ["Sauvignon Blanc", "Chardonnay", "Pinot Noir", "Syrah"],
        "best_time": "March to May (Harvest season)",
    },
    {
        "name": "Swartland",
        "description": "The wild west of South African wine, known for natural wines and old vines",
        "climate": "Mediterranean with hot summers",
        "soil": "Granite and shale",
        "specialties": ["Chenin Blanc", "Shiraz", "Grenache", "Cinsault"],
        "best_time": "February to April (Harvest season)",
    },
]

RATING_LABELS = {
    1: "Poor",
    2: "Fair",
    3: "Good",
    4: "Very Good",
    5: "Excellent",
}

# (label, min inclusive, max exclusive); None means unbounded
PRICE_RANGES = [
    ("Under $20", 0, 20),
    ("$20 - $50", 20, 50),
    ("$50 - $100", 50, 100),
    ("$100 - $200", 100, 200),
    ("Over $200", 200, None),
]

WEATHER_WINE_PAIRINGS = {
    "sunny": {
        "description": "Perfect for light, refreshing wines",
        "recommendations": ["Sauvignon Blanc", "Pinot Grigio", "Rosé", "Prosecco"],
        "tips": "Serve slightly chilled, avoid heavy reds",
        "serving_temp": "8-10°C",
    },
    "cloudy": {
        "description": "Great for medium-bodied wines",
        "recommendations": ["Chardonnay", "Pinot Noir", "Merlot", "Viognier"],
        "tips": "Room temperature for reds, slightly chilled for whites",
        "serving_temp": "12-16°C",
    },
    "rainy": {
        "description": "Ideal for bold, warming wines",
        "recommendations": ["Cabernet Sauvignon", "Shiraz", "Malbec", "Zinfandel"],
        "tips": "Serve at room temperature, consider decanting",
        "serving_temp": "16-18°C",
    },
    "hot": {
        "description": "Best for crisp, refreshing wines",
        "recommendations": ["Riesling", "Albariño", "Gewürztraminer", "Sparkling"],
        "tips": "Serve well chilled, avoid high alcohol wines",
        "serving_temp": "6-8°C",
    },
    "cold": {
        "description": "Perfect for rich, full-bodied wines",
        "recommendations": ["Barolo", "Bordeaux", "Port", "Madeira"],
        "tips": "Serve at room temperature, consider warming slightly",
        "serving_temp": "17-19°C",
    },
}

DEFAULT_FOOD_PAIRINGS = [
    "Grilled red meats",
    "Aged cheeses",
    "Rich pasta dishes",
    "Dark chocolate",
    "Mushroom-based dishes",
]


def tasting_options() -> dict:
    """All tasting-note vocabularies as JSON-ready dictionaries."""

    def _opts(pairs):
        return [{"value": v, "label": label} for v, label in pairs]

    return {
        "clarity": _opts(CLARITY_OPTIONS),
        "appearance_intensity": _opts(APPEARANCE_INTENSITY_OPTIONS),
        "colour": _opts(COLOUR_OPTIONS),
        "nose_condition": _opts(NOSE_CONDITION_OPTIONS),
        "nose_intensity": _opts(NOSE_INTENSITY_OPTIONS),
        "primary_aromas": PRIMARY_AROMA_OPTIONS,
        "secondary_aromas": SECONDARY_AROMA_OPTIONS,
        "tertiary_aromas": TERTIARY_AROMA_OPTIONS,
        "palate": {key: _opts(pairs) for key, pairs in PALATE_OPTIONS.items()},
        "quality": _opts(QUALITY_OPTIONS),
    }


# Training centre catalog
TRAINING_MODULES = [
    {
        "id": "italian-wines-101",
        "title": "Italian Wine Regions Masterclass",
        "description": "Learn about Piedmont, Tuscany, Veneto, and other famous Italian wine regions",
        "type": "quiz",
        "difficulty": "beginner",
        "duration": 15,
        "region": "Italy",
    },
    {
        "id": "barolo-recommendation",
        "title": "Barolo Recommendation Simulation",
        "description": "Practice recommending Barolo to skeptical guests",
        "type": "simulation",
        "difficulty": "intermediate",
        "duration": 10,
        "region": "Italy",
    },
    {
        "id": "wine-pairing-basics",
        "title": "Wine & Food Pairing Fundamentals",
        "description": "Master the art of pairing wines with various cuisines",
        "type": "quiz",
        "difficulty": "beginner",
        "duration": 20,
        "region": "Global",
    },
    {
        "id": "upselling-techniques",
        "title": "Premium Wine Upselling",
        "description": "Learn techniques to suggest premium wines to guests",
        "type": "microlearning",
        "difficulty": "advanced",
        "duration": 12,
        "region": "Global",
    },
    {
        "id": "south-african-wines",
        "title": "South African Wine Discovery",
        "description": "Explore Stellenbosch, Franschhoek, and other SA regions",
        "type": "quiz",
        "difficulty": "intermediate",
        "duration": 18,
        "region": "South Africa",
    },
]

QUIZ_QUESTIONS = [
    {
        "id": "q1",
        "question": "Which Italian region is famous for Barolo wine?",
        "options": ["Tuscany", "Piedmont", "Veneto", "Sicily"],
        "correct_answer": 1,
        "explanation": "Barolo is produced in the Piedmont region, specifically in the Langhe area.",
        "region": "Italy",
        "category": "wine-knowledge",
    },
    {
        "id": "q2",
        "question": "What is the best food pairing for Chianti Classico?",
        "options": ["Fish", "Pasta with tomato sauce", "Chicken", "Dessert"],
        "correct_answer": 1,
        "explanation": (
            "Chianti Classico pairs excellently with pasta dishes, "
            "especially those with tomato-based sauces."
        ),
        "region": "Italy",
        "category": "pairing",
    },
    {
        "id": "q3",
        "question": 'A guest asks for a "smooth red wine under $50". What would you recommend?',
        "options": ["Barolo", "Chianti Classico", "Pinot Noir", "Cabernet Sauvignon"],
        "correct_answer": 2,
        "explanation": "Pinot Noir is generally smoother and more approachable than the other options.",
        "region": "Global",
        "category": "service",
    },
    {
        "id": "q4",
        "question": "Which grape was created in South Africa by crossing Pinot Noir and Cinsault?",
        "options": ["Chenin Blanc", "Pinotage", "Shiraz", "Colombard"],
        "correct_answer": 1,
        "explanation": "Pinotage was bred at Stellenbosch University in 1925 and is the Cape's signature red.",
        "region": "South Africa",
        "category": "wine-knowledge",
    },
    {
        "id": "q5",
        "question": "Which white grape is the most planted variety in South Africa?",
        "options": ["Sauvignon Blanc", "Chardonnay", "Chenin Blanc", "Viognier"],
        "correct_answer": 2,
        "explanation": "Chenin Blanc, locally called Steen, covers more Cape vineyard than any other grape.",
        "region": "South Africa",
        "category": "wine-knowledge",
    },
]

SIMULATIONS = {
    "barolo-recommendation": {
        "id": "sim1",
        "title": "Barolo Recommendation Challenge",
        "scenario": "A guest says \"I don't like Italian wines, they're too heavy.\"",
        "guest_profile": "Business traveler, prefers lighter wines, budget-conscious",
        "wine_options": ["Barolo", "Chianti Classico", "Pinot Noir", "Prosecco"],
        "correct_response": (
            "I understand your concern about heavy wines. Barolo can be quite full-bodied, "
            "but I'd love to suggest a lighter Italian option like a Chianti Classico, which "
            "is more approachable and pairs beautifully with our pasta dishes."
        ),
        "tips": [
            "Acknowledge the guest's concern",
            "Offer alternatives within their preference",
            "Connect to food pairing",
            "Be confident but not pushy",
        ],
    },
}

# Awarded once every module of the region is completed
CERTIFICATIONS = {
    "Italy": "Italian Wine Specialist",
    "Global": "Wine Service Professional",
    "South Africa": "South African Wine Specialist",
}
