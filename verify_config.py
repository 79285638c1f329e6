#!/usr/bin/env python3
"""Simple script to verify config.example.yaml structure without the application models."""

import yaml
from pathlib import Path


def verify_config_structure():
    """Verify config.example.yaml has the expected structure."""
    config_file = Path("config.example.yaml")

    if not config_file.exists():
        print("✗ config.example.yaml not found")
        return False

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        print(f"✗ Failed to parse config.example.yaml: {e}")
        return False

    if not isinstance(config, dict):
        print("✗ config.example.yaml must contain a mapping at the top level")
        return False

    errors = []

    # Check source structure
    source = config.get('source', {})
    if not isinstance(source, dict):
        errors.append("'source' must be a dictionary")
    else:
        source_type = source.get('type', 'minetur')
        if source_type not in ('minetur', 'file'):
            errors.append(f"source has invalid type: {source_type}")
        if source_type == 'file' and not source.get('path'):
            errors.append("source.path is required when source.type is 'file'")

    # Check location structure
    location = config.get('location', {})
    if not isinstance(location, dict):
        errors.append("'location' must be a dictionary")
    else:
        location_type = location.get('type', 'ip')
        if location_type not in ('static', 'ip'):
            errors.append(f"location has invalid type: {location_type}")
        if location_type == 'static':
            for key, bound in (('latitude', 90), ('longitude', 180)):
                value = location.get(key)
                if not isinstance(value, (int, float)):
                    errors.append(f"location.{key} must be a number for a static location")
                elif not -bound <= value <= bound:
                    errors.append(f"location.{key} must be between -{bound} and {bound}")

    # Check ranking bounds
    ranking = config.get('ranking', {})
    if not isinstance(ranking, dict):
        errors.append("'ranking' must be a dictionary")
    else:
        top_k = ranking.get('top_k', 6)
        if not isinstance(top_k, int) or top_k < 1:
            errors.append("ranking.top_k must be a positive integer")
        radius_km = ranking.get('radius_km')
        if radius_km is not None and (not isinstance(radius_km, (int, float)) or radius_km <= 0):
            errors.append("ranking.radius_km must be a positive number or null")

    # Check optional keys have correct types
    optional_checks = {
        'watch_interval': str,
        'display': dict,
        'logging': dict,
        'advanced': dict,
    }

    for key, expected_type in optional_checks.items():
        if key in config and not isinstance(config[key], expected_type):
            errors.append(f"'{key}' must be of type {expected_type.__name__}")

    if errors:
        print("✗ config.example.yaml validation failed:")
        for error in errors:
            print(f"  - {error}")
        return False

    print("✓ config.example.yaml structure is valid")
    print(f"  - Source: {source.get('type', 'minetur')}")
    print(f"  - Location: {location.get('type', 'ip')}")
    print(f"  - Top K: {ranking.get('top_k', 6)}")
    print(f"  - Radius: {ranking.get('radius_km') or 'unbounded'}")
    print(f"  - Watch interval: {config.get('watch_interval', 'not set')}")
    return True


if __name__ == "__main__":
    import sys
    success = verify_config_structure()
    sys.exit(0 if success else 1)
