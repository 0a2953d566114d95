#!/usr/bin/env python3
"""
Entry point for running the API server
"""

import os

import uvicorn

if __name__ == '__main__':
    host = os.getenv('HOST', '0.0.0.0')
    port = int(os.getenv('PORT', 8000))
    reload = os.getenv('RELOAD', 'true').lower() == 'true'

    uvicorn.run("skillpulse.main:app", host=host, port=port, reload=reload)
