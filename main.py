# Main.py
""""" Entry point for calcy.

   Responsibilities:
   - Hand the command line over to the console front end
   - Turn its result into the process exit status

"""""
import sys

from calcy import Console


def main():

    """
    Start the console.
    - Keep this thin: no business logic here.
    """

    return Console.main()


if __name__ == "__main__":
    sys.exit(main())
