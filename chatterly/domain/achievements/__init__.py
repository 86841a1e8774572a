"""Badges: the static catalog, earned badges and badge evaluation."""
