# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Command-line driver for explaining dispatch decisions."""
