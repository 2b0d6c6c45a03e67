"""
diagram_assist package – merge layer between an AI diagram assistant and the editor.

 - Exception hierarchy in core/exceptions.py
 - Proposal merge pipeline in core/merge_pipeline/
 - Transport-facing service in application/services/
 - Configuration in configs/, logging in observability/
"""
