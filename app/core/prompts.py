TRANSCRIPT_CONTINUES_MARKER = "\n\n[Transcript continues - extract all remaining key information]"

summary_with_transcript_template = """You are a meticulous educational researcher creating an EXHAUSTIVELY DETAILED summary. Extract and document EVERY significant piece of information from this video.

Title: "{title}"
Description: "{description}"

FULL VIDEO TRANSCRIPT (with timestamps):
{transcript}

MISSION: Create the most comprehensive, detailed summary possible. Someone should be able to learn EVERYTHING from your summary without watching the video.

CRITICAL - EXTRACT EVERYTHING:

**Statistics & Numbers:**
- Every statistic, percentage, measurement mentioned
- Growth rates, comparisons, financial figures
- Sample sizes, time periods, quantities
- Ratings, scores, rankings

**Names & People:**
- Every person mentioned (with their role/title)
- Organizations, companies, institutions
- Historical figures, experts cited
- Authors, researchers, sources

**Dates & Timeline:**
- Specific dates, years, time periods
- Historical events and when they occurred
- Deadlines, milestones, timelines
- Before/after comparisons

**Quotes & Direct Statements:**
- Exact quotes from the video creator
- Quotes from experts or other sources
- Key phrases and memorable statements
- Controversial or important claims

**Examples & Case Studies:**
- Every specific example mentioned
- Real-world applications and scenarios
- Success/failure stories
- Anecdotes and illustrations

**Technical Details:**
- Definitions of all technical terms
- Step-by-step processes or methods
- Technical specifications
- Scientific explanations

**References & Sources:**
- Studies mentioned
- Books, articles, research cited
- Websites or resources recommended
- Related topics or concepts

STRUCTURE (15-20 sections):

**1. Video Overview & Context [timestamp]**
Full paragraph explaining: What is this video about? Who is the creator? What's their background/authority? Why did they make this? What problem are they addressing? What's the intended audience? (7-10 sentences)

**2. Opening Thesis & Main Arguments [timestamp]**
What is the central claim? What are they trying to prove or teach? What's their main position? Include any opening statistics or hooks they use. (6-8 sentences)

**3-5. Core Concepts (3 sections) [timestamps throughout]**
For EACH major concept, provide:
- Detailed explanation (what it is)
- Why it matters (significance)
- Supporting evidence (stats, studies, examples)
- How it works (mechanisms, processes)
- Real-world applications
- Counter-arguments or limitations mentioned
(8-12 sentences each)

**6-12. Supporting Topics (7 sections) [timestamps throughout]**
Deep dive into each additional topic, theme, or argument:
- Full context and background
- Specific details, names, dates
- Examples and case studies mentioned
- Statistics and data points
- Quotes from the video
- Connections to other concepts
- Practical implications
(6-10 sentences each)

**13. Methodologies & Processes [timestamps]**
Any step-by-step processes, methods, frameworks, or systems explained. Include specific instructions or steps. (6-8 sentences)

**14. Evidence & Data Presentation [timestamps]**
Comprehensive list of ALL statistics, studies, research, expert opinions cited. Format: "According to [source/study], [specific finding with numbers/dates]." (8-12 points)

**15. Practical Applications & Examples [timestamps]**
Every real-world example, success story, case study, or practical use case mentioned with specific details. (7-10 sentences)

**16. Challenges, Criticisms & Limitations [timestamps]**
Any problems, criticisms, counter-arguments, limitations, or challenges discussed. (5-7 sentences)

**17. Recommendations & Action Steps [timestamps]**
Specific advice, recommendations, or action steps the creator suggests. Be detailed and actionable. (6-8 sentences)

**18. Conclusions & Final Thoughts [timestamps]**
How does the creator wrap up? What are the key takeaways? What final message do they leave? (6-8 sentences)

**19. Additional Context**
Background information, historical context, or related topics mentioned that add depth. (5-7 sentences)

**20. References & Resources**
List all sources, studies, books, websites, tools, or resources mentioned or recommended.

WRITING REQUIREMENTS:
- Include [timestamp] references for EVERY section
- Quote specific phrases in "quotation marks"
- Cite every statistic with context
- Name every person/organization mentioned
- Include ALL dates and timeframes
- Explain every technical term
- Provide examples for abstract concepts
- Write in clear, educational prose
- Each section must be detailed and comprehensive

FORBIDDEN:
- Generic statements without specifics
- Skipping any information from the transcript
- Single-sentence sections
- Vague summaries
- Assuming the reader knows anything

This is a COMPREHENSIVE EDUCATIONAL DOCUMENT. Be thorough, detailed, and exhaustive."""

summary_without_transcript_template = """Create a comprehensive educational summary of this YouTube video:

Title: "{title}"
Description: "{description}"

Note: Transcript was not available for this video. Based on the title and description, provide:

1. **Topic Overview** (full paragraph) - What this video likely covers and why it's important
2. **Key Concepts** (full paragraph) - Main ideas typically associated with this subject
3. **Historical Context** (full paragraph) - Background and development of these ideas
4. **Common Arguments** (full paragraph) - Typical points made in content like this
5. **Practical Applications** (full paragraph) - How this knowledge is applied
6. **Educational Value** (full paragraph) - Why this topic matters for learners

Each section should be a FULL PARAGRAPH with 5-8 sentences."""

# Literal JSON braces are doubled for ChatPromptTemplate.
quiz_template = """Based on this detailed YouTube video summary, create an EXTENSIVE, EDUCATIONAL quiz:

Title: "{title}"
Summary: "{summary}"

Create 8-10 comprehensive multiple-choice questions that deeply test understanding.

QUESTION REQUIREMENTS:
1. **Variety of Cognitive Levels:**
   - 2-3 Knowledge/Recall questions (remembering key facts)
   - 2-3 Comprehension/Application questions (understanding and using concepts)
   - 2-3 Analysis/Synthesis questions (connecting ideas, evaluating arguments)
   - 1-2 Critical Thinking questions (implications, what-ifs, deeper meaning)

2. **Question Quality:**
   - Reference specific content from the video
   - Test actual understanding, not just memorization
   - Be clear, specific, and unambiguous
   - Avoid trick questions or trivial details

3. **Answer Options:**
   - All options should be plausible to someone who didn't watch carefully
   - Wrong answers should represent common misconceptions
   - Make options similar in length and complexity
   - Avoid "all of the above" or "none of the above"

4. **Explanations (CRITICAL - Make these DETAILED):**
   - 4-6 sentences minimum per explanation
   - Explain WHY the correct answer is right
   - Explain WHY wrong answers are incorrect
   - Add educational value beyond just identifying the answer
   - Reference specific video content
   - Connect to broader concepts when relevant

Return ONLY valid JSON (no markdown, no code blocks):
[
  {{
    "question": "Comprehensive question based on video content...",
    "options": ["Detailed option A", "Detailed option B", "Detailed option C", "Detailed option D"],
    "correctAnswer": 0,
    "explanation": "EXTENSIVE explanation (4-6 sentences) that teaches the concept, explains why this answer is correct, why others are wrong, and adds educational context from the video..."
  }}
]

Make this quiz a valuable LEARNING EXPERIENCE, not just a test."""

fallback_summary_template = """Key Points about "{title}":

1. This video provides valuable insights into the main topic and concepts discussed.

2. The content offers educational material designed to help viewers understand complex ideas in an accessible way.

3. Important takeaways include practical knowledge and actionable information related to the subject matter.

4. The video breaks down key concepts to make them easier to grasp and apply.

5. Viewers can expect to gain a deeper understanding of the topic through this comprehensive overview.

Note: A real AI summary requires a configured Anthropic API key."""
