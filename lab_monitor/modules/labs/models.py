# Supabase table: labs
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

labs:
- id: uuid (primary key)
- name: text (not null)
- location: text (nullable)
- capacity: integer (not null)
- equipment: text[] (nullable)
- status: text (not null, default: 'available') - values: available, occupied, maintenance
- locked: boolean (not null, default: false) - set by admins for maintenance
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Published to supabase_realtime so status changes reach every dashboard.
"""
