"""daily-habits: A simple visual habit tracker."""
