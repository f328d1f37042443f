"""
Snake Engine - Main Entry Point
Run this file to watch or benchmark the move decision engine
"""

import logging
import os
import sys


def clear_screen():
    """Clear the terminal screen"""
    os.system('cls' if os.name == 'nt' else 'clear')


def print_banner():
    """Print the banner"""
    print("\n" + "="*60)
    print("  🐍  SNAKE EDGE ADJACENCY ENGINE  🐍")
    print("="*60)


def print_menu():
    """Print the main menu"""
    print("\nChoose an option:")
    print("  1. 🤖 Watch the engine play")
    print("  2. ⚡ Benchmark headless")
    print("  3. 🚪 Exit")
    print()


def get_config(mode_name, show_speed=True):
    """
    Get configuration from user for a specific mode

    Args:
        mode_name: Name of the mode (for display)
        show_speed: Whether to ask about speed

    Returns:
        dict: Configuration dictionary with keys: grid_size, speed, games, verbose
    """
    print("\n" + "="*60)
    print(f"Configuration for {mode_name}")
    print("="*60)
    print("Press Enter to use default values shown in [brackets]\n")

    config = {}

    try:
        grid_size = input("Grid size [10]: ").strip()
        config['grid_size'] = int(grid_size) if grid_size else 10
    except ValueError:
        print("Invalid input. Using default 10x10 grid.")
        config['grid_size'] = 10

    if show_speed:
        try:
            speed_input = input("Speed in cells/second [8]: ").strip()
            config['speed'] = int(speed_input) if speed_input else 8
        except ValueError:
            print("Invalid input. Using default speed 8.")
            config['speed'] = 8
    else:
        config['speed'] = 8

    try:
        config['games'] = int(input("Number of games [1]: ").strip() or "1")
    except ValueError:
        config['games'] = 1

    config['verbose'] = input("Log engine decisions? [y/N]: ").strip().lower() == 'y'

    print("\n" + "="*60)
    print("Configuration Summary:")
    print("="*60)
    print(f"  Grid Size: {config['grid_size']}x{config['grid_size']}")
    if show_speed:
        print(f"  Speed: {config['speed']} cells/second")
    print(f"  Games: {config['games']}")
    print("="*60 + "\n")

    return config


def configure_logging(verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        force=True,
    )


def watch_engine():
    """Launch the rendered engine demo"""
    print("\n" + "="*60)
    print("Starting Engine Demo...")
    print("="*60 + "\n")

    config = get_config("Engine Demo", show_speed=True)
    configure_logging(config['verbose'])

    show_path = input("Show search path overlay? [Y/n]: ").strip().lower() != 'n'

    try:
        from demos.engine_demo import run_games
        run_games(
            num_games=config['games'],
            render=True,
            fps=60,
            speed_cells=config['speed'],
            grid_size=config['grid_size'],
            show_path_overlay=show_path
        )
    except ImportError as e:
        print(f"❌ Error: Could not import engine demo: {e}")
        print("Make sure pygame is installed and demos/engine_demo.py exists.")
    except Exception as e:
        print(f"❌ Error during engine demo: {e}")

    input("\nPress Enter to return to menu...")


def benchmark_engine():
    """Run games headless and report scores and decision times"""
    print("\n" + "="*60)
    print("Starting Headless Benchmark...")
    print("="*60 + "\n")

    config = get_config("Headless Benchmark", show_speed=False)
    configure_logging(config['verbose'])

    try:
        from demos.engine_demo import run_games
        run_games(
            num_games=config['games'],
            render=False,
            grid_size=config['grid_size']
        )
    except ImportError as e:
        print(f"❌ Error: Could not import engine demo: {e}")
    except Exception as e:
        print(f"❌ Error during benchmark: {e}")

    input("\nPress Enter to return to menu...")


def main():
    """Main menu loop"""
    while True:
        clear_screen()
        print_banner()
        print_menu()

        choice = input("Enter your choice (1-3): ").strip()

        if choice == '1':
            watch_engine()
        elif choice == '2':
            benchmark_engine()
        elif choice == '3':
            print("\n👋 Goodbye!\n")
            sys.exit(0)
        else:
            print("\n❌ Invalid choice. Please enter 1-3.")
            input("Press Enter to continue...")


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\n\n👋 Interrupted by user. Goodbye!\n")
        sys.exit(0)
