DEFAULT_CATEGORIES = [
    {"name": "Electronics", "description": "Electronic devices and accessories",
     "icon": "smartphone", "color": "#3B82F6"},
    {"name": "Clothing", "description": "Apparel and fashion items",
     "icon": "shirt", "color": "#A855F7"},
    {"name": "Home & Garden", "description": "Home improvement and gardening supplies",
     "icon": "home", "color": "#22C55E"},
    {"name": "Sports & Outdoors", "description": "Sports equipment and outdoor gear",
     "icon": "bike", "color": "#F97316"},
    {"name": "Books & Media", "description": "Books, movies, and media content",
     "icon": "book", "color": "#6366F1"},
    {"name": "Health & Beauty", "description": "Health and beauty products",
     "icon": "heart", "color": "#EC4899"},
    {"name": "Automotive", "description": "Car parts and automotive supplies",
     "icon": "car", "color": "#6B7280"},
    {"name": "Toys & Games", "description": "Toys and gaming products",
     "icon": "gamepad", "color": "#EF4444"},
    {"name": "Food & Beverages", "description": "Food items and beverages",
     "icon": "utensils", "color": "#EAB308"},
    {"name": "Office Supplies", "description": "Office and business supplies",
     "icon": "clipboard", "color": "#14B8A6"},
    {"name": "Hardware & Tools", "description": "Tools and hardware supplies",
     "icon": "wrench", "color": "#64748B"},
    {"name": "Pharmacy", "description": "Pharmaceutical and medical supplies",
     "icon": "pill", "color": "#F87171"},
]
