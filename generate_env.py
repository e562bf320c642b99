#!/usr/bin/env python3
"""
Environment Configuration Generator for the Asset Lifecycle Engine

This script writes a .env file with:
- Reference catalog location
- Duplicate scan limit
- Logging level and log directory
- HSTS toggle for deployments behind TLS

Usage:
    python generate_env.py              # Interactive mode
    python generate_env.py --force      # Overwrite existing .env
    python generate_env.py --dev        # Development mode (debug logging, no HSTS)
"""

import argparse
import os
import shutil
import sys
from datetime import datetime
from pathlib import Path

from itam_engine.config import DEFAULT_DUPLICATE_SCAN_LIMIT


class EnvGenerator:
    """Generate environment configuration"""

    def __init__(self, dev_mode=False, catalog_path=None):
        self.dev_mode = dev_mode
        self.catalog_path = catalog_path
        self.env_file = Path(__file__).parent / '.env'

    def create_env_content(self):
        """Create the full .env file content"""
        catalog_line = (
            f"ITAM_CATALOG_PATH={self.catalog_path}" if self.catalog_path
            else "# ITAM_CATALOG_PATH=/etc/itam/reference_catalog.json"
        )

        return f"""# Asset Lifecycle Engine Environment Configuration
# Generated: {self._get_timestamp()}

# ============================================================================
# Reference Data
# ============================================================================

# JSON reference catalog (aliases, class categories, required fields, EOL periods)
# Leave unset to use the catalog bundled with the package
{catalog_line}

# ============================================================================
# Duplicate Detection
# ============================================================================

# Corpus size above which intake switches to the serial-indexed duplicate scan
ITAM_DUPLICATE_SCAN_LIMIT={DEFAULT_DUPLICATE_SCAN_LIMIT}

# ============================================================================
# Logging Configuration
# ============================================================================

# Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL
ITAM_LOG_LEVEL={'DEBUG' if self.dev_mode else 'INFO'}

# Directory for JSON log files; console only when unset
{'# ITAM_LOG_DIR=logs' if self.dev_mode else 'ITAM_LOG_DIR=logs'}

# ============================================================================
# Security Settings
# ============================================================================

# Send Strict-Transport-Security; enable only when served over HTTPS
ITAM_ENABLE_HSTS={'False' if self.dev_mode else 'True'}
"""

    def _get_timestamp(self):
        """Get current timestamp for documentation"""
        return datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    def file_exists(self):
        """Check if .env file already exists"""
        return self.env_file.exists()

    def create_backup(self):
        """Create backup of existing .env file"""
        if not self.file_exists():
            return None

        backup_path = self.env_file.parent / f'.env.backup.{self._get_timestamp().replace(":", "-").replace(" ", "_")}'
        shutil.copy2(self.env_file, backup_path)
        return backup_path

    def write_env_file(self, content):
        """Write content to .env file"""
        with open(self.env_file, 'w') as f:
            f.write(content)

        os.chmod(self.env_file, 0o600)

    def generate(self, force=False):
        """
        Generate .env file

        Args:
            force: Overwrite existing .env file without prompting
        """
        if self.file_exists() and not force:
            print(f"\n⚠️  File {self.env_file} already exists!")
            response = input("Do you want to overwrite it? (yes/no): ").lower().strip()

            if response not in ['yes', 'y']:
                print("❌ Aborted. Existing .env file was not modified.")
                return False

            backup_path = self.create_backup()
            if backup_path:
                print(f"✅ Backup created: {backup_path}")

        self.write_env_file(self.create_env_content())
        print(f"✅ Created: {self.env_file}")
        print("\n📋 Next step: python app.py")
        return True


def main():
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description='Generate .env configuration for the Asset Lifecycle Engine',
    )
    parser.add_argument(
        '--force', '-f',
        action='store_true',
        help='Overwrite existing .env file without prompting'
    )
    parser.add_argument(
        '--dev', '-d',
        action='store_true',
        help='Development mode: debug logging, console only, no HSTS'
    )
    parser.add_argument(
        '--catalog',
        help='Path to a custom reference catalog JSON file'
    )
    args = parser.parse_args()

    print("\n" + "=" * 80)
    print("Asset Lifecycle Engine - Environment Generator")
    print("=" * 80)

    generator = EnvGenerator(dev_mode=args.dev, catalog_path=args.catalog)
    sys.exit(0 if generator.generate(force=args.force) else 1)


if __name__ == '__main__':
    main()
