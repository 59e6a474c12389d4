# Supabase table: lab_requests
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

lab_requests:
- id: uuid (primary key)
- lab_id: uuid (foreign key to labs.id, not null)
- lecturer_id: uuid (foreign key lab_requests_lecturer_id_fkey to profiles.id, not null)
- request_date: date (not null)
- start_time: time (not null)
- end_time: time (not null)
- purpose: text (nullable)
- status: text (not null, default: 'pending') - values: pending, approved, rejected
- reviewed_by: uuid (foreign key to profiles.id, nullable)
- reviewed_at: timestamp (nullable)
- admin_notes: text (nullable)
- created_at: timestamp (default: now())

Lecturers insert and read their own rows; admins read all rows and update
status. Published to supabase_realtime.
"""
