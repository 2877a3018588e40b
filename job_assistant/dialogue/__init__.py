"""对话处理层。

该包下的模块负责：
- 关键词标记与意图识别 (keywords、intents)。
- 从自由文本中提取地点、薪资、技能等槽位 (slots)。
- 把意图与槽位转换为职位检索并生成摘要 (query)。
- 按意图套用回复模板 (composer)。
- 会话的加载、追加与清空 (session)，以及整轮编排 (engine)。
"""
