"""Domain services: origin policy, identity verification, score sync.

Routes call into this package so that request parsing stays separate from
the rules about who may submit and which scores are kept.
"""
