"""Export domain - turns a stored signature into email-client-safe HTML"""
