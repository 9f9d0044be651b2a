"""
Concrete ModelTrainEngine implementations.

This module is an organizational namespace only.
Resolve engines through training.engines.registry.
"""
