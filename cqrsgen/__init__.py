"""cqrsgen: generate a Command/Query dispatch API from domain model modules."""

__version__ = "0.3.0"
