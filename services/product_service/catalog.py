"""Built-in catalog loaded into an empty product store on startup."""

_IMG = "https://images.unsplash.com/photo-{}?w=400&h=400&fit=crop"

DEFAULT_CATALOG = [
    {
        "title": "Apple iPhone 15 Pro Max (256GB) - Natural Titanium",
        "description": "A17 Pro chip, titanium design and a 48MP camera system.",
        "price": 1199.99, "original_price": 1299.99, "discount": 8,
        "rating": 4.8, "reviews": 15420, "image": _IMG.format("1696446701796-da61225697cc"),
        "category": "Electronics", "subcategory": "Cell Phones", "brand": "Apple",
        "features": ["A17 Pro chip", "48MP main camera", "Titanium design"],
        "stock_count": 50, "prime": True, "free_shipping": True,
    },
    {
        "title": "Sony WH-1000XM5 Wireless Noise Canceling Headphones",
        "description": "Industry-leading noise cancellation with 30-hour battery life.",
        "price": 328.00, "original_price": 399.99, "discount": 18,
        "rating": 4.7, "reviews": 8932, "image": _IMG.format("1546435770-a3e426bf472b"),
        "category": "Electronics", "subcategory": "Headphones", "brand": "Sony",
        "features": ["Noise cancellation", "30-hour battery life", "Multipoint connection"],
        "stock_count": 100, "prime": True, "free_shipping": True,
    },
    {
        "title": "Samsung 65\" Class OLED 4K S95D Smart TV",
        "description": "Glare-free OLED panel with Neural Quantum Processor 4K.",
        "price": 1997.99, "original_price": 2799.99, "discount": 29,
        "rating": 4.6, "reviews": 3241, "image": _IMG.format("1593359677879-a4bb92f829d1"),
        "category": "Electronics", "subcategory": "Televisions", "brand": "Samsung",
        "stock_count": 25, "prime": True, "free_shipping": True,
    },
    {
        "title": "Dyson V15 Detect Absolute Cordless Vacuum",
        "description": "Laser dust detection and piezo particle counting.",
        "price": 649.99, "original_price": 749.99, "discount": 13,
        "rating": 4.5, "reviews": 6789, "image": _IMG.format("1558317374-067fb5f30001"),
        "category": "Home & Kitchen", "subcategory": "Vacuums", "brand": "Dyson",
        "stock_count": 40, "prime": True, "free_shipping": True,
    },
    {
        "title": "Apple MacBook Pro 16\" M3 Max Chip - Space Black",
        "description": "M3 Max chip, Liquid Retina XDR display, 22-hour battery.",
        "price": 3499.00, "original_price": 3999.00, "discount": 13,
        "rating": 4.9, "reviews": 2156, "image": _IMG.format("1517336714731-489689fd1ca8"),
        "category": "Electronics", "subcategory": "Laptops", "brand": "Apple",
        "stock_count": 20, "prime": True, "free_shipping": True,
    },
    {
        "title": "Nike Air Jordan 1 Retro High OG - Chicago",
        "description": "The original colorway of the iconic 1985 sneaker.",
        "price": 180.00, "original_price": 180.00, "discount": 0,
        "rating": 4.8, "reviews": 12453, "image": _IMG.format("1542291026-7eec264c27ff"),
        "category": "Fashion", "subcategory": "Shoes", "brand": "Nike",
        "stock_count": 75, "prime": True, "free_shipping": True,
    },
    {
        "title": "Instant Pot Duo Plus 9-in-1 Electric Pressure Cooker",
        "description": "Pressure cooker, slow cooker, rice cooker, steamer and more.",
        "price": 89.95, "original_price": 129.99, "discount": 31,
        "rating": 4.7, "reviews": 45678, "image": _IMG.format("1585515320310-259814833e62"),
        "category": "Home & Kitchen", "subcategory": "Kitchen Appliances", "brand": "Instant Pot",
        "stock_count": 150, "prime": True, "free_shipping": True,
    },
    {
        "title": "Kindle Paperwhite Signature Edition (32 GB)",
        "description": "6.8\" glare-free display with auto-adjusting front light.",
        "price": 189.99, "original_price": 199.99, "discount": 5,
        "rating": 4.7, "reviews": 23456, "image": _IMG.format("1544716278-ca5e3f4abd8c"),
        "category": "Electronics", "subcategory": "E-readers", "brand": "Amazon",
        "stock_count": 120, "prime": True, "free_shipping": True,
    },
    {
        "title": "Lego Star Wars Millennium Falcon Ultimate Collector Series",
        "description": "7,541-piece collector model with interchangeable crews.",
        "price": 849.99, "original_price": 849.99, "discount": 0,
        "rating": 4.9, "reviews": 5678, "image": _IMG.format("1558618666-fcd25c85cd64"),
        "category": "Toys & Games", "subcategory": "Building Sets", "brand": "LEGO",
        "stock_count": 15, "prime": True, "free_shipping": True,
    },
    {
        "title": "The North Face Nuptse 1996 Retro Jacket",
        "description": "Boxy 700-fill goose down jacket with stowable hood.",
        "price": 330.00, "original_price": 330.00, "discount": 0,
        "rating": 4.6, "reviews": 8765, "image": _IMG.format("1544022613-e87ca75a784a"),
        "category": "Fashion", "subcategory": "Outerwear", "brand": "The North Face",
        "stock_count": 60, "prime": True, "free_shipping": True,
    },
    {
        "title": "PlayStation 5 DualSense Controller - Cosmic Red",
        "description": "Haptic feedback and adaptive triggers.",
        "price": 74.99, "original_price": 74.99, "discount": 0,
        "rating": 4.8, "reviews": 34567, "image": _IMG.format("1606144042614-b2417e99c4e3"),
        "category": "Video Games", "subcategory": "Controllers", "brand": "Sony",
        "stock_count": 200, "prime": True, "free_shipping": True,
    },
    {
        "title": "Peloton Bike+ Indoor Exercise Bike",
        "description": "Rotating HD touchscreen and auto-resistance.",
        "price": 2495.00, "original_price": 2495.00, "discount": 0,
        "rating": 4.6, "reviews": 8765, "image": _IMG.format("1591291621164-2c6367723315"),
        "category": "Sports & Outdoors", "subcategory": "Exercise Bikes", "brand": "Peloton",
        "stock_count": 10, "prime": False, "free_shipping": True,
    },
]
