# -*- coding: utf-8 -*-
"""Food analysis pipeline.

request handler -> AI gateway client -> nutrition extraction parser.
Nothing in this package persists data; storing a meal is the caller's job.
"""
