"""
Test Factories

Concrete factories used by the test-suite to exercise the Factory base
class with dictionary, dataclass and plain-object models.
"""
