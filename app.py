#!/usr/bin/env python3

import logging
import os

from aws_cdk import App

from foundry_vtt.config import StackConfig
from foundry_vtt.deployment import build

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())

app = App()
build(app, StackConfig.from_env())
app.synth()
