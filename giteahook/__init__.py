"""Receive, authenticate and decode Gitea webhook deliveries."""
