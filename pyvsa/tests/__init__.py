import os

home = os.path.dirname(os.path.abspath(__file__))
