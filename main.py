"""Run Fill the Air from a source checkout: ``python main.py --help``."""

from fill_the_air.game import main


if __name__ == "__main__":
    main()
