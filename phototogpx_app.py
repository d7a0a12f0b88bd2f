import sys
from pathlib import Path

# Add src to path to ensure photogpx package is found
sys.path.append(str(Path(__file__).parent / "src"))

from photogpx.gui import main

if __name__ == "__main__":
    main()
