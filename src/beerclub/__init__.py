"""Subscription-driven beer ordering."""
