# Supabase table: issues
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

issues:
- id: uuid (primary key)
- lab_id: uuid (foreign key to labs.id, not null)
- reported_by: uuid (foreign key issues_reported_by_fkey to profiles.id, not null)
- issue_type: text (not null) - Microphone, Projector, PC/Computer, Air Conditioning, Network, Other
- description: text (not null)
- status: text (not null, default: 'open') - values: open, in_progress, resolved
- resolved_by: uuid (foreign key to profiles.id, nullable)
- resolved_at: timestamp (nullable)
- created_at: timestamp (default: now())

Lecturers insert and read their own reports; admins read all rows and update
status. Published to supabase_realtime.
"""
