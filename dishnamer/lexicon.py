"""Word pools for template-based dish names."""

ADJECTIVES = (
    "Golden", "Crimson", "Sunset", "Emerald", "Savory", "Spicy", "Delicate",
    "Rustic", "Garden", "Summer", "Winter", "Autumn", "Spring", "Roasted",
    "Grilled", "Sizzling", "Tender", "Crunchy", "Creamy", "Zesty", "Tangy",
    "Smoky", "Fragrant", "Aromatic", "Herb-Kissed", "Glazed", "Caramelized",
    "Pan-Seared", "Oven-Baked", "Slow-Cooked", "Charred", "Buttery",
)

NOUNS = (
    "Delight", "Symphony", "Medley", "Fusion", "Feast", "Creation", "Dream",
    "Harvest", "Melody", "Paradise", "Wonder", "Celebration", "Journey",
    "Adventure", "Masterpiece", "Treasure", "Magic", "Bliss", "Fantasy",
    "Rhapsody", "Serenade", "Enchantment", "Odyssey", "Harmony",
)

DESCRIPTORS = (
    "Weekend", "Sunday", "Saturday", "Evening", "Morning", "Midnight",
    "Homestyle", "Classic", "Traditional", "Modern", "Fusion", "Artisan",
    "Gourmet", "Comfort", "Elegant", "Simple", "Rustic", "Urban", "Countryside",
)

FOOD_TYPES = (
    "Curry", "Stir-Fry", "Roast", "Pasta", "Rice Bowl", "Noodles", "Soup",
    "Salad", "Gratin", "Casserole", "Skillet", "Platter", "Bowl", "Plate",
    "Dish", "Feast", "Medley", "Mix", "Blend",
)

PLAYFUL_PREFIXES = (
    "The Happy", "The Lazy", "The Cozy", "The Merry", "The Jolly",
    "Love Letter to", "Ode to", "Symphony of", "Dance of", "Tales of",
)

# Slot order of every three-name suggestion set
TONES = ("elegant", "playful", "descriptive")
