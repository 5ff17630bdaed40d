# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Value model shared by the classifier, scorer and introspection layers."""
