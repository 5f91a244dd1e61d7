"""
Export pipeline — backend-neutral building blocks.

    document   GeneratedDocument + relative path helpers
    scope      ProjectScope / ConfigurationScope
    toolchain  Stage-specific flag providers
    pipeline   run_elements + render_cascade
"""
