"""Streamlit entry point. Run with: streamlit run run.py"""

import logging

from mass_timber_designer.app import main

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

main()
