
# registry-related errors
class UnknownAlgorithmError(Exception):
    pass

class DuplicateAlgorithmError(Exception):
    pass

class InvalidDescriptorError(Exception):
    pass

class CatalogFileError(Exception):
    pass

# comparison-related errors
class ComparisonError(Exception):
    pass

class MalformedEncodingError(ComparisonError):
    def __init__(self, text, *args):
        super(MalformedEncodingError, self).__init__(text, *args)
        self.text = text

class LengthMismatchError(ComparisonError):
    pass

# parameter schema errors
class InvalidParameterError(Exception):
    pass

# configuration errors
class SettingsFileError(Exception):
    pass
