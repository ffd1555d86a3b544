""" Command line interface of the kaleido compiler. """
