# -*- coding: utf-8 -*-
"""Core of the /trumpify slash command: rewriting, messaging and dispatch."""
