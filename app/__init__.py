"""
Fabric Asset Gateway

REST gateway forwarding asset operations to Hyperledger Fabric chaincode.
"""

__version__ = "1.0.0"
