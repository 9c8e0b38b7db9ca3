"""
Allow running the package with: python -m imgdupe

Examples:
    python -m imgdupe /path/to/photos            # Resolve duplicates
    python -m imgdupe /path/to/photos --dry-run  # Report only
    python -m imgdupe /path/to/photos --undo     # Restore a previous run
    python -m imgdupe config --init              # Create example config file
"""

import sys


def main():
    if len(sys.argv) > 1 and sys.argv[1] == 'config':
        # Remove 'config' from argv
        sys.argv.pop(1)
        from .user_config import get_user_config

        config = get_user_config()

        if '--init' in sys.argv or '-i' in sys.argv:
            if config.create_example_config():
                print("Created example configuration file at:")
                print(f"  {config.config_file_path}")
                print("\nEdit this file to customize imgdupe settings.")
            else:
                print("Failed to create configuration file.")
                sys.exit(1)
        else:
            print(f"Configuration file: {config.config_file_path}")
            if config.config_file_path.exists():
                print("Status: found")
            else:
                print("Status: not found (using defaults)")
                print("\nRun 'python -m imgdupe config --init' to create one.")

            print("\nCurrent settings:")
            print(f"  default_algorithm: {config.default_algorithm}")
            print(f"  default_sensitivity: {config.default_sensitivity}")
            print(f"  default_workers: {config.default_workers}")
            print(f"  quarantine_dir_name: {config.quarantine_dir_name}")
            print(f"  max_image_pixels: {config.max_image_pixels:,}")

            from .scanner import has_heif_support
            print(f"\nHEIC/HEIF support: {'yes' if has_heif_support() else 'no (pip install pillow-heif)'}")
    else:
        from .cli import main as cli_main
        sys.exit(cli_main())


if __name__ == '__main__':
    main()
