# main_qt.py
from digit_board.window import main

if __name__ == "__main__":
    main()
