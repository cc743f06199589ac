#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Transports exposing a genkai dispatcher over the network.
"""
