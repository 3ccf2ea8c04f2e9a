"""
Dog CEO breed names.
Maps Dog CEO breed keys ("beagle", "retriever-golden") to display names.
Sub-breeds use the hyphenated "parent-sub" form used in breed-images.json.
"""

from typing import Dict, List, Tuple


DOG_CEO_BREED_MAP: Dict[str, str] = {
    "affenpinscher": "Affenpinscher",
    "african-wild": "African Wild Dog",
    "airedale": "Airedale Terrier",
    "akita": "Akita",
    "appenzeller": "Appenzeller Sennenhund",
    "australian-kelpie": "Australian Kelpie",
    "australian-shepherd": "Australian Shepherd",
    "bakharwal-indian": "Bakharwal Dog",
    "basenji": "Basenji",
    "beagle": "Beagle",
    "bluetick": "Bluetick Coonhound",
    "borzoi": "Borzoi",
    "bouvier": "Bouvier des Flandres",
    "boxer": "Boxer",
    "brabancon": "Petit Brabançon",
    "briard": "Briard",
    "buhund-norwegian": "Norwegian Buhund",
    "bulldog-boston": "Boston Terrier",
    "bulldog-english": "English Bulldog",
    "bulldog-french": "French Bulldog",
    "bullterrier-staffordshire": "Staffordshire Bull Terrier",
    "cattledog-australian": "Australian Cattle Dog",
    "cavapoo": "Cavapoo",
    "chihuahua": "Chihuahua",
    "chippiparai-indian": "Chippiparai",
    "chow": "Chow Chow",
    "clumber": "Clumber Spaniel",
    "cockapoo": "Cockapoo",
    "collie": "Collie",
    "collie-border": "Border Collie",
    "coonhound": "Coonhound",
    "corgi": "Corgi",
    "corgi-cardigan": "Cardigan Welsh Corgi",
    "cotondetulear": "Coton de Tuléar",
    "dachshund": "Dachshund",
    "dalmatian": "Dalmatian",
    "dane-great": "Great Dane",
    "deerhound-scottish": "Scottish Deerhound",
    "dhole": "Dhole",
    "dingo": "Dingo",
    "doberman": "Doberman Pinscher",
    "elkhound-norwegian": "Norwegian Elkhound",
    "entlebucher": "Entlebucher Mountain Dog",
    "eskimo": "American Eskimo Dog",
    "finnish-lapphund": "Finnish Lapphund",
    "frise-bichon": "Bichon Frise",
    "gaddi-indian": "Gaddi Kutta",
    "german-shepherd": "German Shepherd",
    "greyhound": "Greyhound",
    "greyhound-indian": "Indian Greyhound",
    "greyhound-italian": "Italian Greyhound",
    "groenendael": "Belgian Groenendael",
    "havanese": "Havanese",
    "hound-afghan": "Afghan Hound",
    "hound-basset": "Basset Hound",
    "hound-blood": "Bloodhound",
    "hound-english": "English Foxhound",
    "hound-ibizan": "Ibizan Hound",
    "hound-plott": "Plott Hound",
    "hound-walker": "Treeing Walker Coonhound",
    "husky": "Siberian Husky",
    "keeshond": "Keeshond",
    "kelpie": "Kelpie",
    "kombai": "Kombai",
    "komondor": "Komondor",
    "kuvasz": "Kuvasz",
    "labradoodle": "Labradoodle",
    "labrador": "Labrador Retriever",
    "leonberg": "Leonberger",
    "lhasa": "Lhasa Apso",
    "malamute": "Alaskan Malamute",
    "malinois": "Belgian Malinois",
    "maltese": "Maltese",
    "mastiff-bull": "Bullmastiff",
    "mastiff-english": "English Mastiff",
    "mastiff-indian": "Indian Mastiff",
    "mastiff-tibetan": "Tibetan Mastiff",
    "mexicanhairless": "Mexican Hairless Dog (Xoloitzcuintli)",
    "mix": "Mixed Breed",
    "mountain-bernese": "Bernese Mountain Dog",
    "mountain-swiss": "Greater Swiss Mountain Dog",
    "mudhol-indian": "Mudhol Hound",
    "newfoundland": "Newfoundland",
    "otterhound": "Otterhound",
    "ovcharka-caucasian": "Caucasian Shepherd Dog",
    "papillon": "Papillon",
    "pariah-indian": "Indian Pariah Dog",
    "pekinese": "Pekingese",
    "pembroke": "Pembroke Welsh Corgi",
    "pinscher": "Pinscher",
    "pinscher-miniature": "Miniature Pinscher",
    "pitbull": "American Pit Bull Terrier",
    "pointer-german": "German Shorthaired Pointer",
    "pointer-germanlonghair": "German Longhaired Pointer",
    "pomeranian": "Pomeranian",
    "poodle-medium": "Medium Poodle",
    "poodle-miniature": "Miniature Poodle",
    "poodle-standard": "Standard Poodle",
    "poodle-toy": "Toy Poodle",
    "pug": "Pug",
    "puggle": "Puggle",
    "pyrenees": "Great Pyrenees",
    "rajapalayam-indian": "Rajapalayam",
    "redbone": "Redbone Coonhound",
    "retriever-chesapeake": "Chesapeake Bay Retriever",
    "retriever-curly": "Curly-Coated Retriever",
    "retriever-flatcoated": "Flat-Coated Retriever",
    "retriever-golden": "Golden Retriever",
    "ridgeback-rhodesian": "Rhodesian Ridgeback",
    "rottweiler": "Rottweiler",
    "rough-collie": "Rough Collie",
    "saluki": "Saluki",
    "samoyed": "Samoyed",
    "schipperke": "Schipperke",
    "schnauzer": "Schnauzer",
    "schnauzer-giant": "Giant Schnauzer",
    "schnauzer-miniature": "Miniature Schnauzer",
    "segugio-italian": "Segugio Italiano",
    "setter-english": "English Setter",
    "setter-gordon": "Gordon Setter",
    "setter-irish": "Irish Setter",
    "sharpei": "Shar Pei",
    "sheepdog-english": "Old English Sheepdog",
    "sheepdog-indian": "Himalayan Sheepdog",
    "sheepdog-shetland": "Shetland Sheepdog",
    "shiba": "Shiba Inu",
    "shihtzu": "Shih Tzu",
    "spaniel-blenheim": "Blenheim Spaniel",
    "spaniel-brittany": "Brittany Spaniel",
    "spaniel-cocker": "Cocker Spaniel",
    "spaniel-irish": "Irish Water Spaniel",
    "spaniel-japanese": "Japanese Chin",
    "spaniel-sussex": "Sussex Spaniel",
    "spaniel-welsh": "Welsh Springer Spaniel",
    "spitz-indian": "Indian Spitz",
    "spitz-japanese": "Japanese Spitz",
    "springer-english": "English Springer Spaniel",
    "stbernard": "St. Bernard",
    "terrier-american": "American Staffordshire Terrier",
    "terrier-andalusian": "Andalusian Terrier",
    "terrier-australian": "Australian Terrier",
    "terrier-bedlington": "Bedlington Terrier",
    "terrier-border": "Border Terrier",
    "terrier-boston": "Boston Terrier",
    "terrier-cairn": "Cairn Terrier",
    "terrier-dandie": "Dandie Dinmont Terrier",
    "terrier-fox": "Fox Terrier",
    "terrier-irish": "Irish Terrier",
    "terrier-kerryblue": "Kerry Blue Terrier",
    "terrier-lakeland": "Lakeland Terrier",
    "terrier-norfolk": "Norfolk Terrier",
    "terrier-norwich": "Norwich Terrier",
    "terrier-patterdale": "Patterdale Terrier",
    "terrier-russell": "Jack Russell Terrier",
    "terrier-scottish": "Scottish Terrier",
    "terrier-sealyham": "Sealyham Terrier",
    "terrier-silky": "Silky Terrier",
    "terrier-tibetan": "Tibetan Terrier",
    "terrier-toy": "Toy Fox Terrier",
    "terrier-welsh": "Welsh Terrier",
    "terrier-westhighland": "West Highland White Terrier",
    "terrier-wheaten": "Soft-Coated Wheaten Terrier",
    "terrier-yorkshire": "Yorkshire Terrier",
    "tervuren": "Belgian Tervuren",
    "vizsla": "Vizsla",
    "waterdog-spanish": "Spanish Water Dog",
    "weimaraner": "Weimaraner",
    "whippet": "Whippet",
    "wolfhound-irish": "Irish Wolfhound",
}


def get_readable_breed_name(breed_key: str) -> str:
    """
    Get the display name for a Dog CEO breed key.

    Unknown keys fall back to title case ("some-new-breed" -> "Some New Breed").

    Args:
        breed_key: Dog CEO breed key (e.g. "retriever-golden")

    Returns:
        Human-readable breed name
    """
    if not breed_key or not isinstance(breed_key, str):
        return "Unknown Breed"

    normalized = breed_key.lower().strip()
    mapped = DOG_CEO_BREED_MAP.get(normalized)
    if mapped:
        return mapped

    return " ".join(word[:1].upper() + word[1:] for word in normalized.split("-"))


def get_breed_slug(breed_key: str) -> str:
    """URL-safe slug for a breed key."""
    if not breed_key or not isinstance(breed_key, str):
        return "unknown"
    return "-".join(breed_key.lower().strip().split())


def get_api_path(breed_key: str) -> str:
    """
    Convert a breed key to its Dog CEO API path.

    Args:
        breed_key: Breed key, e.g. "retriever-golden"

    Returns:
        API path, e.g. "retriever/golden"
    """
    if not breed_key or not isinstance(breed_key, str):
        return ""
    return breed_key.lower().strip().replace("-", "/", 1)


def is_known_breed(breed_key: str) -> bool:
    if not breed_key or not isinstance(breed_key, str):
        return False
    return breed_key.lower().strip() in DOG_CEO_BREED_MAP


def get_all_breed_keys() -> List[str]:
    return list(DOG_CEO_BREED_MAP.keys())


def get_all_breeds() -> List[Tuple[str, str]]:
    """All (breed_key, display_name) pairs."""
    return list(DOG_CEO_BREED_MAP.items())


def search_breeds(query: str) -> List[Tuple[str, str]]:
    """
    Case-insensitive substring search over breed keys and display names.

    Args:
        query: Search text, e.g. "terrier"

    Returns:
        Matching (breed_key, display_name) pairs
    """
    if not query or not isinstance(query, str):
        return []

    needle = query.lower().strip()
    return [
        (key, name)
        for key, name in DOG_CEO_BREED_MAP.items()
        if needle in key or needle in name.lower()
    ]


def get_breed_count() -> int:
    return len(DOG_CEO_BREED_MAP)
