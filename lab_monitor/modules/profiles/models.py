# Supabase table: profiles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- email: text (not null) - synced from auth.users
- full_name: text (nullable)
- role: text (not null, default: 'student') - values: admin, lecturer, student
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

A trigger on auth.users inserts the row on sign-up using the full_name and
role from the user metadata. Row-level security lets every user read and
update their own row; only admins may read all rows or change a role.
"""
