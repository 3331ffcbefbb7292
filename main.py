# Main.py
""""" Entry point for the Complex Calculator.

   Responsibilities:
   - Verify required files exist in development mode
   - Hand the command line over to the CLI

"""""
import sys
from pathlib import Path
from complex_calculator import CLI as CLI


PROJECT_ROOT = Path(__file__).resolve().parent


def check_files_exist():

    """
      Fail fast if engine files are missing / moved / renamed.
    """

    package_dir = PROJECT_ROOT / "complex_calculator"

    REQUIRED = [
        package_dir / "MathEngine.py",
        package_dir / "ComplexNumber.py",
        package_dir / "ScientificEngine.py",
        package_dir / "EquivalenceEngine.py",
        package_dir / "config_manager.py",
        PROJECT_ROOT / "config.json",
    ]

    missing_files = []
    for file_path in REQUIRED:
        if not file_path.exists():
            missing_files.append(file_path.name)

    if missing_files:
        print("Error: The following files are missing or in the wrong location:")
        for file_name in missing_files:
            print(f"- {file_name}")
        sys.exit(1)


def main():
    # Keep this thin: the CLI owns argument parsing and output.
    return CLI.main()


if __name__ == "__main__":
    check_files_exist()
    sys.exit(main())
