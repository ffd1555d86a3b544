""" Main entry point """

from .cli.kaleido import kaleido


if __name__ == "__main__":
    kaleido()
