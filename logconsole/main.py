#!/usr/bin/env python3
"""
Log Console - Main Entry Point
Run the runtime log console terminal UI
"""
import sys
import traceback

from logconsole.UI import run_app


def main() -> None:
    print("Starting Log Console...")
    print("Press 'q' to quit, '/' to search, 'c' to clear, 'x' to clear and reset filters")
    print("-" * 80)

    try:
        run_app()
    except KeyboardInterrupt:
        print("\nLog Console terminated by user")
    except Exception as e:
        print(f"\nError running Log Console: {e}")
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
