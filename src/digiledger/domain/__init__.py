"""Domain layer for digiledger application.

Services are imported from their modules directly
(e.g. ``digiledger.domain.transaction``) so that the database layer can
import ``digiledger.domain.entities`` without pulling in the services.
"""
