"""Anonymize a captured award API payload for use as a test fixture.

Walks the award JSON, replaces every nominee name with a fake one generated
by faker with a fixed seed, drops nominee images, and writes the result.
Nominee codes, prices, dates and vote counts are kept since tests rely on
them.

Usage:
    python scripts/anonymize_award.py captured/award.json
    python scripts/anonymize_award.py captured/award.json -o output.json
"""

import argparse
import json
from pathlib import Path

from faker import Faker

FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "fixtures"
DEFAULT_OUTPUT = FIXTURES_DIR / "award.json"

SEED = 20250115


def discover_names(award: dict) -> set[str]:
    """Collect every nominee name in the payload."""
    names: set[str] = set()
    for category in award.get("categories") or []:
        for nominee in category.get("nominees") or []:
            name = (nominee.get("name") or "").strip()
            if name:
                names.add(name)
    return names


def generate_fake_names(names: set[str], seed: int) -> dict[str, str]:
    """Map each real name to a distinct fake name.

    The same person nominated in several categories keeps one fake name.
    """
    fake = Faker(["en_US", "en_GB"])
    Faker.seed(seed)

    lowered = {n.lower() for n in names}
    mapping: dict[str, str] = {}
    used: set[str] = set()
    for name in sorted(names):
        fake_name = fake.name()
        while fake_name.lower() in lowered or fake_name.lower() in used:
            fake_name = fake.name()
        used.add(fake_name.lower())
        mapping[name] = fake_name
    return mapping


def apply_replacements(award: dict, mapping: dict[str, str]) -> dict:
    """Return a copy of the award with nominee names swapped and images dropped."""
    result = json.loads(json.dumps(award))
    for category in result.get("categories") or []:
        for nominee in category.get("nominees") or []:
            name = (nominee.get("name") or "").strip()
            if name in mapping:
                nominee["name"] = mapping[name]
            nominee["image"] = None
    return result


def main():
    parser = argparse.ArgumentParser(
        description="Anonymize a captured award payload")
    parser.add_argument("input", help="Path to the captured JSON file")
    parser.add_argument("-o", "--output", default=str(DEFAULT_OUTPUT),
                        help=f"Output path (default: {DEFAULT_OUTPUT})")
    args = parser.parse_args()

    payload = json.loads(Path(args.input).read_text(encoding="utf-8"))
    award = payload.get("data", payload)

    names = discover_names(award)
    print(f"Found {len(names)} unique nominee names")

    mapping = generate_fake_names(names, SEED)
    result = apply_replacements(award, mapping)

    remaining = names & discover_names(result)
    if remaining:
        print(f"WARNING: {len(remaining)} names still found: {sorted(remaining)}")
    else:
        print("All names successfully replaced.")

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(result, indent=2, ensure_ascii=False) + "\n",
                           encoding="utf-8")
    print(f"Written to {output_path}")


if __name__ == "__main__":
    main()
