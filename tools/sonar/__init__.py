"""Quality-profile server integration.

Split into:
  - api.py   : all HTTP calls to the server (SonarQube / SonarCloud web API)
  - rules.py : pure parsing of API payloads into domain objects
  - types.py : small shared data structures

pipeline/ drives these through the QualityProfileServer interface; nothing in
here knows about the pre-processing order.
"""
