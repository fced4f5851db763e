"""Map the bones of a target skeleton onto a source skeleton.

Uses the BoneAutoMapper interface: Mixamo targets are mapped by direct
table lookup, everything else by fuzzy name matching.

Usage:
    # Engine skeleton onto a Mixamo rig (direct lookup)
    python map_bones.py --source data/canonical_human.yaml --target data/mixamo_human.yaml

    # Engine skeleton onto an arbitrary rig (fuzzy matching), saving the result
    python map_bones.py --source data/canonical_human.yaml --target data/generic_rig.txt \
        --output mapping.yaml

Bone list files are YAML/JSON lists of names, or plain text with one name per line.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List

import yaml

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from bone_automap import BoneAutoMapper, save_mapping

logger = logging.getLogger("map_bones")


def load_bone_names(path: Path) -> List[str]:
    """Read bone names from a YAML/JSON list or a text file with one name per line."""
    if not path.exists():
        raise FileNotFoundError(f"Bone list not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        data = None

    if isinstance(data, dict):
        data = data.get("bones")
    if isinstance(data, list):
        return [str(name) for name in data]
    return [line.strip() for line in text.splitlines() if line.strip()]


def run_mapping(
    source_path: str,
    target_path: str,
    config_path: str = "config/default.yaml",
    output_path: str = "",
):
    """Map bones and print the result.

    Args:
        source_path: Source skeleton bone list
        target_path: Target skeleton bone list
        config_path: YAML configuration file (relative paths resolve next to this script)
        output_path: Optional YAML file to save the mapping to

    Returns:
        mapping: target bone name -> source bone name
    """
    config_file = Path(config_path)
    if not config_file.is_absolute():
        config_file = Path(__file__).parent / config_path
    if not config_file.exists():
        raise FileNotFoundError(f"Config file not found: {config_file}")

    source_names = load_bone_names(Path(source_path))
    target_names = load_bone_names(Path(target_path))
    logger.info("Loaded %d source bones, %d target bones", len(source_names), len(target_names))

    mapper = BoneAutoMapper.from_yaml(config_file)
    mapping, verbose = mapper.map_bones_verbose(source_names, target_names)

    print(f"Strategy: {verbose['strategy']}")
    print("=" * 50)
    width = max((len(name) for name in mapping), default=0)
    for match in verbose['matches']:
        if mapping.get(match.target) != match.source:
            continue
        print(f"  {match.target:<{width}} -> {match.source}  [{match.method} {match.score:.2f}]")
    print("=" * 50)
    print(f"Mapped {len(mapping)}/{len(target_names)} target bones")
    if verbose['unmapped']:
        print(f"Unmapped: {', '.join(verbose['unmapped'])}")

    if output_path:
        save_mapping(mapping, output_path)
        print(f"Saved mapping to {output_path}")

    return mapping


def main():
    parser = argparse.ArgumentParser(
        description='Map target skeleton bones to source skeleton bones by name',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument('--source', type=str, required=True, metavar='FILE',
                        help='Source skeleton bone list')
    parser.add_argument('--target', type=str, required=True, metavar='FILE',
                        help='Target skeleton bone list')
    parser.add_argument('--config', type=str, default='config/default.yaml',
                        help='Config file path (default: config/default.yaml)')
    parser.add_argument('--output', type=str, default='', metavar='FILE',
                        help='Save the mapping to a YAML file')
    parser.add_argument('--verbose', action='store_true',
                        help='Log every accepted match')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        run_mapping(
            source_path=args.source,
            target_path=args.target,
            config_path=args.config,
            output_path=args.output,
        )
    except (FileNotFoundError, ValueError) as e:
        parser.error(str(e))


if __name__ == "__main__":
    main()
