#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright (c) 2025 Battelle Energy Alliance, LLC.  All rights reserved.

"""Idempotent Docker Engine + Compose plugin provisioning for Linux hosts and WSL."""

__version__ = "1.0.0"
