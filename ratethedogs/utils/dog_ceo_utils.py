"""
Dog CEO API data utilities.
Pure functions for flattening the breed list, building image URLs, validating
and de-duplicating breed image collections, and computing catalog statistics.
"""

from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urlparse
from loguru import logger


BreedImages = Dict[str, List[str]]

VALID_IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")


def flatten_breed_list(breeds: Dict[str, List[str]]) -> List[str]:
    """
    Flatten the nested Dog CEO breed list.

    {"bulldog": ["french", "english"], "beagle": []} becomes
    ["bulldog", "bulldog-french", "bulldog-english", "beagle"].

    Args:
        breeds: Nested breed structure from /breeds/list/all

    Returns:
        Flat list of breed keys
    """
    breed_list: List[str] = []

    for breed, sub_breeds in breeds.items():
        if not isinstance(breed, str) or not breed.strip():
            continue

        parent = breed.lower()
        breed_list.append(parent)

        if isinstance(sub_breeds, list):
            for sub_breed in sub_breeds:
                if isinstance(sub_breed, str) and sub_breed.strip():
                    breed_list.append(f"{parent}-{sub_breed.lower()}")

    return breed_list


def get_breed_images_url(breed: str, base_url: str = "https://dog.ceo/api") -> str:
    """
    Build the Dog CEO URL listing every image of a breed.

    Args:
        breed: Breed key, possibly "parent-sub"
        base_url: API base URL

    Returns:
        Images endpoint URL

    Raises:
        ValueError: If the breed is empty or the sub-breed form is malformed
    """
    if not breed or not isinstance(breed, str):
        raise ValueError("Breed must be a non-empty string")

    normalized = breed.lower().strip()

    if "-" in normalized:
        parts = normalized.split("-")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise ValueError(f'Invalid sub-breed format: {breed}. Expected "parent-sub".')
        parent, sub = parts
        return f"{base_url}/breed/{parent}/{sub}/images"

    return f"{base_url}/breed/{normalized}/images"


def validate_image_url(url: str) -> Dict[str, Any]:
    """
    Validate a Dog CEO image URL (https://images.dog.ceo/breeds/{breed}/{file}).

    Args:
        url: URL to check

    Returns:
        {"valid": bool, "errors": [str, ...]}
    """
    if not url or not isinstance(url, str):
        return {"valid": False, "errors": ["URL must be a non-empty string"]}

    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        return {"valid": False, "errors": ["Invalid URL format"]}

    errors: List[str] = []

    if parsed.hostname != "images.dog.ceo":
        errors.append(f"Unexpected hostname: {parsed.hostname}")

    if parsed.scheme != "https":
        errors.append(f"Expected HTTPS, got: {parsed.scheme}:")

    path_parts = [part for part in parsed.path.split("/") if part]
    if len(path_parts) < 3:
        errors.append("Path too short, expected /breeds/{breed}/{filename}")
    first = path_parts[0] if path_parts else ""
    if first != "breeds":
        errors.append(f"Expected path to start with /breeds/, got: {first}")

    filename = path_parts[-1] if path_parts else ""
    if not filename.lower().endswith(VALID_IMAGE_EXTENSIONS):
        errors.append(f"Invalid or missing image extension: {filename.rsplit('.', 1)[-1]}")

    return {"valid": not errors, "errors": errors}


def extract_breed_from_url(image_url: str) -> Optional[str]:
    """
    Extract the breed key from an image URL.

    https://images.dog.ceo/breeds/bulldog-french/x.jpg gives "bulldog-french".
    Returns None when the URL cannot be parsed or has no /breeds/ segment.
    """
    if not image_url or not isinstance(image_url, str):
        return None

    parsed = urlparse(image_url)
    if not parsed.scheme or not parsed.netloc:
        return None

    path_parts = parsed.path.split("/")
    if len(path_parts) >= 3 and path_parts[1] == "breeds":
        return path_parts[2]
    return None


def filter_duplicate_images(breed_images: BreedImages) -> Dict[str, Any]:
    """
    Drop images filed under the wrong breed.

    The Dog CEO parent-breed listings sometimes include sub-breed images
    ("corgi" contains "corgi-cardigan" images). An image is kept when its URL
    breed matches the key or cannot be determined. Breeds left without images
    are removed.

    Args:
        breed_images: Map of breed key -> image URLs

    Returns:
        {"filtered": BreedImages, "removed_count": int, "empty_breeds": [str]}
    """
    removed_count = 0
    filtered: BreedImages = {}
    empty_breeds: List[str] = []

    for breed, images in breed_images.items():
        if not isinstance(images, list):
            empty_breeds.append(breed)
            continue

        kept = []
        for image_url in images:
            url_breed = extract_breed_from_url(image_url)
            if url_breed is None or url_breed == breed:
                kept.append(image_url)

        removed_count += len(images) - len(kept)

        if kept:
            filtered[breed] = kept
        else:
            empty_breeds.append(breed)

    return {"filtered": filtered, "removed_count": removed_count, "empty_breeds": empty_breeds}


def merge_duplicate_breed_names(
    breed_images: BreedImages,
    name_resolver: Callable[[str], str],
) -> Dict[str, Any]:
    """
    Merge breeds that share a display name.

    Boston Terrier is listed as both "bulldog-boston" and "terrier-boston".
    Images of such breeds are combined (de-duplicated, order preserved) under
    the key with the most images.

    Args:
        breed_images: Map of breed key -> image URLs
        name_resolver: Maps a breed key to its display name

    Returns:
        {"merged": BreedImages, "merged_breeds": [{"canonical", "merged", "image_count"}]}
    """
    by_display_name: Dict[str, List[Dict[str, Any]]] = {}
    for breed, images in breed_images.items():
        by_display_name.setdefault(name_resolver(breed), []).append(
            {"key": breed, "images": images}
        )

    merged: BreedImages = {}
    merged_breeds: List[Dict[str, Any]] = []

    for display_name, breeds in by_display_name.items():
        if len(breeds) == 1:
            merged[breeds[0]["key"]] = breeds[0]["images"]
            continue

        breeds = sorted(breeds, key=lambda b: len(b["images"]), reverse=True)
        canonical, others = breeds[0], breeds[1:]

        all_images = list(dict.fromkeys(canonical["images"]))
        seen = set(all_images)
        for other in others:
            for image in other["images"]:
                if image not in seen:
                    seen.add(image)
                    all_images.append(image)

        merged[canonical["key"]] = all_images
        other_keys = [o["key"] for o in others]
        merged_breeds.append({
            "canonical": canonical["key"],
            "merged": other_keys,
            "image_count": len(all_images),
        })
        logger.info(
            f'Merged "{display_name}": {canonical["key"]} + {", ".join(other_keys)} '
            f"= {len(all_images)} images"
        )

    return {"merged": merged, "merged_breeds": merged_breeds}


def calculate_stats(
    breed_images: BreedImages,
    duplicates_removed: int = 0,
    empty_breeds_removed: int = 0,
) -> Dict[str, Any]:
    """
    Summarize a breed image catalog.

    Args:
        breed_images: Map of breed key -> image URLs
        duplicates_removed: Misplaced images dropped while filtering
        empty_breeds_removed: Breeds dropped for having no images

    Returns:
        Totals plus per-breed counts sorted by count descending
    """
    breed_stats = sorted(
        (
            {"breed": breed, "count": len(images) if isinstance(images, list) else 0}
            for breed, images in breed_images.items()
        ),
        key=lambda b: b["count"],
        reverse=True,
    )

    return {
        "total_breeds": len(breed_images),
        "total_images": sum(b["count"] for b in breed_stats),
        "duplicates_removed": duplicates_removed,
        "empty_breeds_removed": empty_breeds_removed,
        "breed_stats": breed_stats,
    }


def find_invalid_urls(breed_images: BreedImages) -> Dict[str, List[str]]:
    """Invalid image URLs grouped by breed (breeds with none are omitted)."""
    invalid_by_breed: Dict[str, List[str]] = {}

    for breed, images in breed_images.items():
        if not isinstance(images, list):
            continue
        invalid = [url for url in images if not validate_image_url(url)["valid"]]
        if invalid:
            invalid_by_breed[breed] = invalid

    return invalid_by_breed


def breed_to_api_path(breed: str) -> str:
    """Convert bulldog-french to bulldog/french."""
    if not breed or not isinstance(breed, str):
        raise ValueError("Breed must be a non-empty string")
    return breed.lower().strip().replace("-", "/", 1)


def api_path_to_breed(api_path: str) -> str:
    """Convert bulldog/french back to bulldog-french."""
    if not api_path or not isinstance(api_path, str):
        raise ValueError("API path must be a non-empty string")
    return api_path.lower().strip().replace("/", "-", 1)
