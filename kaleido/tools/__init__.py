""" Generic helpers to construct hand written lexers and parsers. """
