"""Personal investment portfolio tracker."""
